"""Command-line interface for rendering molecules as text or images."""

import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings
from .drawer import AsciiMolDrawer, DrawerConfig
from .errors import InputFormatError, NameResolutionError, StructureGenerationError

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(description="Render a molecule as a character-grid diagram")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--smiles", help="SMILES string to render")
    source.add_argument("--name", help="Chemical name, resolved through OPSIN_URL")
    parser.add_argument(
        "molfile", nargs="?", default="-", help="V2000 molfile path, or '-' for stdin"
    )
    parser.add_argument("--ascii", action="store_true", help="Use 7-bit ASCII glyphs")
    parser.add_argument(
        "--no-charges", action="store_true", help="Do not append formal charges to labels"
    )
    parser.add_argument(
        "--target-bond-chars",
        type=float,
        default=1.0,
        help="Grid columns per average bond",
    )
    parser.add_argument("--padding", type=int, default=2, help="Blank cells around the diagram")
    parser.add_argument(
        "--format", choices=["text", "svg", "png"], default="text", help="Output format"
    )
    parser.add_argument("--ink", default=None, help="Ink color for svg/png output")
    parser.add_argument("--output", "-o", help="Output file (required for png)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def _read_molfile(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r") as f:
        return f.read()


def _resolve_smiles(args, settings: Settings) -> Optional[str]:
    if args.smiles:
        return args.smiles
    if args.name:
        if not settings.opsin_url:
            raise NameResolutionError("Name lookup is not configured (set OPSIN_URL)")
        from .name_lookup import name_to_smiles

        return name_to_smiles(args.name, settings.opsin_url, timeout=settings.opsin_timeout)
    return None


def _write_image(args, smiles: Optional[str], molblock: Optional[str], settings: Settings):
    from .structure import mol_from_molblock, mol_from_smiles
    from .vector import rasterize_png, render_svg

    mol = mol_from_smiles(smiles) if smiles else mol_from_molblock(molblock)
    size = (settings.svg_size, settings.svg_size)
    svg = render_svg(mol, size=size, ink=args.ink or settings.ink_color)

    if args.format == "svg":
        if args.output:
            with open(args.output, "w") as f:
                f.write(svg)
        else:
            sys.stdout.write(svg)
        return

    with open(args.output, "wb") as f:
        f.write(rasterize_png(svg))
    logger.info(f"Wrote {args.output}")


def run(argv: Optional[List[str]] = None) -> int:
    parser = setup_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.format == "png" and not args.output:
        parser.error("--output is required for png")

    try:
        config = DrawerConfig(
            target_bond_chars=args.target_bond_chars,
            padding=args.padding,
            show_formal_charge=not args.no_charges,
            use_unicode=not args.ascii,
        )
        smiles = _resolve_smiles(args, settings)
        molblock = None
        if smiles is None:
            molblock = _read_molfile(args.molfile)

        if args.format != "text":
            _write_image(args, smiles, molblock, settings)
            return 0

        if smiles is not None:
            from .structure import smiles_to_molblock

            molblock = smiles_to_molblock(smiles)
        art = AsciiMolDrawer(config).draw_molblock(molblock)
    except (InputFormatError, StructureGenerationError, NameResolutionError, ValueError,
            OSError, ImportError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(art + "\n")
    return 0


def main() -> None:
    """Main entry point for the moltext CLI."""
    sys.exit(run())


if __name__ == "__main__":
    main()
