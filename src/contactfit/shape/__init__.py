# -*- coding: utf-8 -*-

from .shape_fitter import ContactShape, ContactShapeFitter

__all__ = ["ContactShape", "ContactShapeFitter"]
