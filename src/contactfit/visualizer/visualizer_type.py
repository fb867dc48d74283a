from enum import IntEnum


class VisualizerType(IntEnum):
    """
    Enum class for different types of visualizers.
    """
    PyVista = 0
