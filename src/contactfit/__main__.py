# -*- coding: utf-8 -*-
"""
Command line entry point.

    python -m contactfit ROM_FILE AFFORDANCE_FILE [--kind ellipse|circle] [--no-progress] [--show] [-v]

Both files are loaded with ``parse_file``; the first mesh of each is placed
at the identity pose. Exit status 1 means the meshes are not in contact.
"""

import argparse
import logging
import sys

import numpy as np

from .file_parser import parse_file
from .geometry_kernel import ContactExtractor, Ellipse
from .geometry_kernel.static_class import ConicKind
from .shape import ContactShapeFitter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contactfit",
        description="Extract the contact region of a ROM and an affordance mesh and fit a circle or ellipse to it.",
    )
    parser.add_argument("rom", help="Range-of-motion mesh file (.amf, .stl, .obj, ...)")
    parser.add_argument("affordance", help="Affordance mesh file")
    parser.add_argument("--kind", choices=[k.value for k in ConicKind], default=ConicKind.ELLIPSE.value,
                        help="Conic to fit (default: ellipse, falls back to circle)")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars")
    parser.add_argument("--show", action="store_true", help="Open a PyVista window with the result")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    progress = not args.no_progress

    rom = parse_file(args.rom, progress=progress).collision_object(0)
    affordance = parse_file(args.affordance, progress=progress).collision_object(0)

    fitter = ContactShapeFitter(ContactExtractor(progress=progress), kind=args.kind)
    shape = fitter.fit(rom, affordance)
    if shape is None:
        print("No contact between the meshes.")
        return 1

    np.set_printoptions(precision=6, suppress=True)
    print(f"contact points: {len(shape.points)}")
    print(f"plane normal:   {shape.normal}")
    print(f"center (world): {shape.center}")
    if isinstance(shape.shape, Ellipse):
        print(f"ellipse: radius1={shape.shape.radius1:.6g} radius2={shape.shape.radius2:.6g} "
              f"tau={shape.shape.tau:.6g} rad")
    else:
        print(f"circle: radius={shape.shape.radius:.6g}")
    print(f"conic params:   {shape.params}")

    if args.show:
        fitter.show(shape, rom, affordance)
    return 0


if __name__ == "__main__":
    sys.exit(main())
