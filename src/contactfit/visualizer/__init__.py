"""
ContactFit Visualization Package
================================

Optional 3D debug views of ROM / affordance meshes, contact points and
fitted contact shapes.

The design is a factory plus an abstract base class, so that other
backends can be added next to PyVista.

Modules
-------
- `visualizer_interface`: abstract base class `IVisualizer` and its `create()` factory.
- `pyvista_visualizer`: PyVista implementation `PyVistaVisualizer`.
- `visualizer_type`: `VisualizerType` enum selecting the backend.

Usage Example
-------------
.. code-block:: python

    from contactfit.visualizer import IVisualizer, VisualizerType

    visualizer = IVisualizer.create(VisualizerType.PyVista)
    visualizer.add_object(rom, opacity=0.3)
    visualizer.add_object(affordance)
    visualizer.add_shape(shape)
    visualizer.show()

Notes
-----
- Needs `pyvista` (and VTK). `PyVistaVisualizer()` raises ImportError without it.
- The window event loop has to run in the main thread.
"""

__version__ = "1.0.0"
__author__ = "QilongJiang"
__license__ = "MIT"
# -*- coding: utf-8 -*-

from .visualizer_type import VisualizerType
from .visualizer_interface import IVisualizer
from .pyvista_visualizer import PyVistaVisualizer

__all__ = ["IVisualizer", "PyVistaVisualizer", "VisualizerType"]
