from __future__ import annotations

import argparse
import logging
from pathlib import Path

from watermarker import __version__
from watermarker.config import PlatformInfo, default_config_path, load_config_layer, resolve
from watermarker.config.loader import MIN_VALID_EXAMPLE_TOML
from watermarker.exceptions import WatermarkerError
from watermarker.models.settings import AnchorPosition, EffectiveSettings, RawConfigLayer, Resolution
from watermarker.pipeline import run_pipeline

_POSITION_CHOICES = ", ".join(member.name for member in AnchorPosition)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="watermarker",
        description="Resize JPEG images and stamp a logo onto them",
        epilog=f"Example config.toml (default location: {default_config_path(PlatformInfo.current())}):\n\n"
        + MIN_VALID_EXAMPLE_TOML,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--config-file", default=None, metavar="FILE", help="Path to config file")
    parser.add_argument("-o", "--output-path", default=None, metavar="PATH", help="Output directory (default: .)")
    parser.add_argument(
        "-l",
        "--logo-file-path",
        default=None,
        metavar="PATH",
        help="Logo image, typically a transparent PNG",
    )
    parser.add_argument(
        "-p",
        "--logo-position",
        default=None,
        metavar="POSITION",
        help=f"Logo position: {_POSITION_CHOICES} (default: BOTTOM_RIGHT)",
    )
    parser.add_argument(
        "-r",
        "--resolution",
        default=None,
        metavar="RES",
        help="Output resolution as a preset (QVGA, VGA, SVGA, HD, QuadVGA, FullHD) or WxH (default: HD)",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        default=None,
        help="Overwrite output files that already exist",
    )
    parser.add_argument(
        "-s",
        "--show-options",
        action="store_true",
        help="Print the resolved settings and exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("inputs", nargs="+", metavar="INPUT", help="Input JPEG files or directories")
    return parser.parse_args(argv)


def build_cli_layer(args: argparse.Namespace) -> RawConfigLayer:
    return RawConfigLayer(
        logo_path=Path(args.logo_file_path) if args.logo_file_path else None,
        anchor=AnchorPosition.parse(args.logo_position) if args.logo_position else None,
        resolution=Resolution.parse(args.resolution) if args.resolution else None,
        output_dir=Path(args.output_path) if args.output_path else None,
        overwrite=args.force,
        inputs=tuple(Path(item) for item in args.inputs),
    )


def show_settings(settings: EffectiveSettings) -> None:
    config_path = settings.config_path if settings.config_path is not None else "(none)"
    print(f"config path:       {config_path}")
    print(f"output path:       {settings.output_dir}")
    print(f"logo file path:    {settings.logo_path}")
    print(f"logo position:     {settings.anchor}")
    print(f"output resolution: {settings.resolution}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")

    try:
        cli_layer = build_cli_layer(args)
        explicit_config = Path(args.config_file) if args.config_file else None
        file_layer, config_path = load_config_layer(explicit_config, PlatformInfo.current())
        settings = resolve(cli_layer, file_layer, config_path=config_path)

        if args.show_options:
            show_settings(settings)
            return

        metrics = run_pipeline(settings)
    except (WatermarkerError, OSError) as exc:
        raise SystemExit(f"error: {exc}") from exc

    summary = metrics.to_dict()
    print("Run metrics")
    print(f"- Files processed: {summary['files_processed']}")
    print(f"- Files skipped: {summary['files_skipped']}")
    print(f"- Execution time (s): {summary['execution_time_seconds']}")


if __name__ == "__main__":
    main()
