"""Command-line interface for ascii_dither.

Supports plain text output and a JSON status mode for scripting.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import NoReturn

from ascii_dither.core.charsets import CharsetName
from ascii_dither.core.kernels import KernelName
from ascii_dither.core.processor import Algorithm, DitherMode, OutputType

DESCRIPTION = "Convert images into ASCII or braille art using error diffusion."


def _parse_breakpoints(value: str) -> tuple[float, ...]:
    try:
        return tuple(float(p) for p in value.split(",") if p.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected comma-separated floats, got {value!r}"
        ) from None


def _choice(enum_cls):
    """Case-insensitive argparse type for a str Enum."""

    def convert(value: str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(e.value for e in enum_cls)
            raise argparse.ArgumentTypeError(
                f"invalid choice: {value!r} (choose from {choices})"
            ) from None

    return convert


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ascii-dither",
        description=DESCRIPTION,
    )
    parser.add_argument("input", help="Input image file path.")
    parser.add_argument(
        "-t", "--type",
        dest="output_type",
        type=_choice(OutputType),
        default=OutputType.TEXT,
        metavar="{text,braille}",
        help="Type of output (default: text).",
    )
    parser.add_argument(
        "-T", "--op-type",
        dest="algorithm",
        type=_choice(Algorithm),
        default=Algorithm.KERNEL,
        metavar="{kernel,legacy}",
        help="How to process the image (default: kernel).",
    )
    parser.add_argument(
        "-k", "--kernel",
        type=_choice(KernelName),
        default=KernelName.FS,
        metavar="{none,fs,stucki,atkinson}",
        help="Error diffusion kernel (default: fs).",
    )
    parser.add_argument(
        "-m", "--mode",
        type=_choice(DitherMode),
        default=None,
        metavar="{onoff,interpolate}",
        help="Quantization policy (default: interpolate for text, onoff for braille).",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=0.5,
        help="On/off threshold, also the first derived breakpoint (default: 0.5).",
    )
    parser.add_argument(
        "--breakpoints",
        type=_parse_breakpoints,
        default=None,
        help="Comma-separated increasing breakpoints in [0, 1].",
    )
    parser.add_argument(
        "-c", "--contrast",
        type=float,
        default=0.0,
        help="Contrast adjustment in percent (default: 0).",
    )
    parser.add_argument(
        "-b", "--brighten",
        type=int,
        default=0,
        help="Value added to every 0-255 sample (default: 0).",
    )
    parser.add_argument(
        "--blur",
        type=float,
        default=0.0,
        help="Gaussian blur radius (default: 0).",
    )
    parser.add_argument(
        "--sharpen",
        action="store_true",
        help="Sharpen before sampling.",
    )
    parser.add_argument(
        "--invert",
        action="store_true",
        help="Invert luminance.",
    )
    parser.add_argument(
        "-W", "--width",
        type=int,
        default=0,
        help="Width of the output character grid.",
    )
    parser.add_argument(
        "-H", "--height",
        type=int,
        default=0,
        help="Height of the output character grid.",
    )
    parser.add_argument(
        "--charset",
        type=_choice(CharsetName),
        default=CharsetName.SIMPLE,
        metavar="{simple,detailed,blocks}",
        help="Character set preset (default: simple).",
    )
    parser.add_argument(
        "-C", "--chars",
        help="File with the characters to use, ordered dark to light.",
    )
    parser.add_argument(
        "-f", "--fmt",
        default="{}",
        help="Format string for each character (default: '{}').",
    )
    parser.add_argument(
        "-F", "--fmtln",
        default="{}\\n",
        help="Format string for each line (default: '{}\\n').",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output file path. Defaults to stdout.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON status document instead of log messages.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug messages.",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only show warnings and errors.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error.",
    )
    return parser


def _unescape(fmt: str) -> str:
    return fmt.replace("\\n", "\n").replace("\\t", "\t")


def _json_error(message: str, code: str) -> None:
    """Print JSON error to stderr and exit with code 1."""
    err = {"status": "error", "error": message, "code": code}
    print(json.dumps(err), file=sys.stderr)
    sys.exit(1)


def _fail(args: argparse.Namespace, message: str, code: str) -> NoReturn:
    from ascii_dither.utils.logs import logger

    if args.json:
        _json_error(message, code)
    if args.debug:
        logger.exception(message)
    else:
        logger.error(message)
    sys.exit(1)


def _run(args: argparse.Namespace) -> None:
    """Run the conversion pipeline."""
    from ascii_dither.core.charsets import load_charset
    from ascii_dither.core.errors import ConfigurationError
    from ascii_dither.core.processor import Settings, process_image
    from ascii_dither.core.reader import load_image
    from ascii_dither.core.writer import format_lines, write_text
    from ascii_dither.utils.logs import logger
    from ascii_dither.utils.terminal import resolve_size

    input_path = Path(args.input).resolve()
    output_path = Path(args.output).resolve() if args.output else None

    try:
        image, info = load_image(input_path)
    except FileNotFoundError:
        _fail(args, f"File not found: {input_path}", "FILE_NOT_FOUND")
    except ConfigurationError as e:
        _fail(args, str(e), "INVALID_INPUT")

    if info.frame_count > 1:
        logger.warning(
            "%s has %d frames; only the first is converted",
            input_path.name,
            info.frame_count,
        )

    chars = None
    if args.chars:
        try:
            chars = load_charset(args.chars).chars
        except (FileNotFoundError, ConfigurationError) as e:
            _fail(args, str(e), "INVALID_CHARSET")

    if args.width < 0 or args.height < 0:
        _fail(args, "--width and --height must not be negative", "INVALID_SETTINGS")
    width, height = resolve_size(
        info.width,
        info.height,
        args.width,
        args.height,
        braille=args.output_type == OutputType.BRAILLE,
    )

    settings = Settings(
        output=args.output_type,
        algorithm=args.algorithm,
        kernel=args.kernel,
        mode=args.mode,
        threshold=args.threshold,
        breakpoints=args.breakpoints,
        charset=args.charset,
        chars=chars,
        brightness=args.brighten,
        contrast=args.contrast,
        blur=args.blur,
        sharpen=args.sharpen,
        invert=args.invert,
        width=width,
        height=height,
        char_fmt=_unescape(args.fmt),
        line_fmt=_unescape(args.fmtln),
    )
    logger.debug("Settings %s: %s", settings.hash(), settings)

    try:
        result = process_image(image, settings)
    except ConfigurationError as e:
        _fail(args, str(e), "INVALID_SETTINGS")

    if args.json and output_path is None:
        text = format_lines(result.lines, settings.line_fmt)
    else:
        try:
            text = write_text(result.lines, output_path, line_fmt=settings.line_fmt)
        except (ConfigurationError, OSError) as e:
            _fail(args, str(e), "WRITE_FAILED")

    if output_path is not None:
        logger.info("Saved to %s", output_path)

    if args.json:
        payload = {
            "status": "success",
            "input": str(input_path),
            "output": str(output_path) if output_path else None,
            "settings": {
                "type": settings.output.value,
                "algorithm": settings.algorithm.value,
                "kernel": settings.kernel.value,
                "mode": settings.mode.value if settings.mode else None,
                "threshold": settings.threshold,
                "width": settings.width,
                "height": settings.height,
            },
            "metadata": {
                "input_format": info.format,
                "input_width": info.width,
                "input_height": info.height,
                "lines": len(result.lines),
            },
        }
        if output_path is None:
            payload["text"] = text
        print(json.dumps(payload, indent=2))


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    from ascii_dither.utils.logs import configure_logging

    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet or args.json)
    _run(args)


if __name__ == "__main__":
    main()
