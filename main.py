"""
Block Transform Studio
Tiled kernel transforms (block DCT round trip) over multi-channel images
"""

import argparse
import logging
import sys
import warnings

warnings.filterwarnings('ignore', category=RuntimeWarning)


def setup_argparse() -> argparse.ArgumentParser:
    """Set up argument parser."""
    parser = argparse.ArgumentParser(
        prog="block-transform-studio",
        description="Run a forward/inverse block DCT over an image",
    )
    parser.add_argument(
        "image_path",
        nargs="?",
        help="Path to an 8-bit RGB image",
    )
    parser.add_argument(
        "--synthetic",
        choices=["checkerboard", "stripes", "gradient"],
        help="Use a generated test image instead of a file",
    )
    parser.add_argument("--block-size", "-n", type=int, default=4, help="Transform size (default: 4)")
    parser.add_argument("--workers", type=int, default=None, help="Thread pool size (default: auto)")
    parser.add_argument("--separable", action="store_true", help="Use the two-pass separable path")
    parser.add_argument("--output", "-o", default="reconstructed.png", help="Where to save the result")
    parser.add_argument("--show", action="store_true", help="Display the result in a window")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def run_cli(argv=None) -> int:
    """Run the block transform round trip and print metrics."""
    from models.errors import ImageError
    from models.transform_params import TransformParams
    from engines.pipeline import block_transform_roundtrip
    from utils.test_images import generate_demo_image
    from utils.image_io import load_image, save_image

    parser = setup_argparse()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.image_path and not args.synthetic:
        parser.print_help()
        return 0

    try:
        params = TransformParams(
            block_size=args.block_size,
            max_workers=args.workers,
            use_separable=args.separable
        )

        if args.synthetic:
            print(f"Generating test image: {args.synthetic}")
            image = generate_demo_image(args.synthetic)
        else:
            print(f"Loading: {args.image_path}")
            image = load_image(args.image_path)

        print(f"Image: {image.width}x{image.height}")
        print(f"Block size: {params.block_size}")

        result = block_transform_roundtrip(image, params)
    except (ImageError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\n=== Results ===")
    print(f"PSNR:      {result.psnr:.2f} dB")
    print(f"Max error: {result.max_error:.6f}")
    print(f"Time:      {result.forward_time_ms + result.inverse_time_ms:.2f} ms")

    save_image(result.reconstructed_image, args.output)
    print(f"\nSaved: {args.output}")

    if args.show:
        from utils.display import show_rgb
        show_rgb(result.reconstructed_image, "Reconstructed")

    return 0


def main():
    sys.exit(run_cli())


if __name__ == '__main__':
    main()
