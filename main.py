# Command-line entry point: hide/recover images and text in carrier images

import argparse                                # CLI parsing
import logging
import sys

from secretpix.detect import detect_file_type, is_lossy_output   # input sniffing + lossy output check
from secretpix.errors import StegoError
from secretpix.image_codec import hide_image_file, decrypt_image_file  # image in image
from secretpix.reconcile import ReconcilePolicy
from secretpix.text_codec import hide_text_file, extract_text_file     # text in image

logger = logging.getLogger("secretpix")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="secretpix",
        description="Hides and decrypts images and text in the low bit planes of an image",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    hide_img = sub.add_parser("hide_img", help="Hides image")
    hide_img.add_argument("--source", required=True, help="Carrier image")
    hide_img.add_argument("--secret", required=True, help="Image to hide")
    hide_img.add_argument("--output", required=True)
    fit = hide_img.add_mutually_exclusive_group()
    fit.add_argument("--resize", action="store_const", dest="policy", const=ReconcilePolicy.RESIZE,
                     help="Resample the smaller image when the secret does not fit")
    fit.add_argument("--expand", action="store_const", dest="policy", const=ReconcilePolicy.EXPAND,
                     help="Pad the smaller image with black when the secret does not fit")

    decrypt_img = sub.add_parser("decrypt_img", help="Decrypts image")
    decrypt_img.add_argument("--source", required=True)
    decrypt_img.add_argument("--output", required=True)

    hide_txt = sub.add_parser("hide_txt", help="Hides text in an image")
    hide_txt.add_argument("--image", required=True)
    hide_txt.add_argument("--output", required=True)
    hide_txt.add_argument("--text", required=True, nargs="+")

    decrypt_txt = sub.add_parser("decrypt_txt", help="Decrypts text from an image")
    decrypt_txt.add_argument("--image", required=True)

    return parser


def _check_input(path):
    file_type = detect_file_type(path)
    logger.info("Detected file type of %s: %s", path, file_type)
    if file_type == "unknown":
        logger.warning("%s does not look like a known image format", path)


def _check_output(path):
    if is_lossy_output(path):
        logger.warning("%s uses a lossy format; the hidden bits will not survive. Use PNG.", path)


def run(args):
    if args.command == "hide_img":
        _check_input(args.source)
        _check_input(args.secret)
        _check_output(args.output)
        hide_image_file(args.source, args.secret, args.output, policy=args.policy)
        print("Image hidden successfully")

    elif args.command == "decrypt_img":
        _check_input(args.source)
        _check_output(args.output)
        decrypt_image_file(args.source, args.output)
        print("Image decrypted successfully")

    elif args.command == "hide_txt":
        _check_input(args.image)
        _check_output(args.output)
        hide_text_file(args.image, args.output, " ".join(args.text))
        print("Text hidden successfully")

    elif args.command == "decrypt_txt":
        _check_input(args.image)
        print(f"Extracted Text: {extract_text_file(args.image)}")


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args)
    except (StegoError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
