import argparse
import sys
from pathlib import Path
from typing import Optional

from ocrspace.core.config import DEMO_API_KEY, settings
from ocrspace.models.errors import OcrSpaceError
from ocrspace.services.client import OcrSpaceClient
from ocrspace.services.response_reader import require_body
from ocrspace.utils.logging import Logger

logger = Logger.get_logger("ocrspace.cli")


def resolve_api_key(api_key: Optional[str]) -> str:
    if api_key:
        return api_key
    if settings.ocrspace_api_key:
        return settings.ocrspace_api_key
    logger.warning("No api key defined, using default apikey")
    return DEMO_API_KEY


def _str_to_bool(value: str) -> bool:
    value = value.lower()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"Expected true/false, got {value!r}")


def process_document(args: argparse.Namespace, client: Optional[OcrSpaceClient] = None) -> int:
    owns_client = client is None
    try:
        if client is None:
            client = OcrSpaceClient(
                resolve_api_key(args.api_key),
                endpoint=args.endpoint or settings.ocrspace_endpoint,
            )

        builder = (
            client.get_request_builder()
            .set_ocr_engine(args.ocr_engine)
            .set_language(args.language)
            .set_overlay_required(args.overlay)
            .set_table(args.table)
            .set_scale(args.scale)
            .set_detect_orientation(args.detect_orientation)
            .set_filetype(args.filetype)
            .set_create_searchable_pdf(args.searchable_pdf)
            .set_searchable_pdf_hide_text_layer(args.hide_text_layer)
        )

        if args.file:
            request = builder.target_file(Path(args.file))
        elif args.url:
            request = builder.target_url(args.url)
        else:
            content = Path(args.base64_file).read_text(encoding="utf-8").strip()
            request = builder.target_base64(content)

        if args.use_async:
            response = request.async_request().result()
        else:
            response = request.request()

        with response:
            print(require_body(response))
        return 0

    except OcrSpaceError as e:
        logger.error(f"Error processing document: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error(f"Error reading input: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if owns_client and client is not None:
            client.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ocrspace",
        description="OCR.space request CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ocrspace process --file receipt.png --language auto --ocr-engine 2 --table --scale
  ocrspace process --url https://example.com/scan.pdf --filetype PDF
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    process_parser = subparsers.add_parser('process', help='Send a document to the OCR endpoint')
    target = process_parser.add_mutually_exclusive_group(required=True)
    target.add_argument('--file', help='Path to a local image or PDF')
    target.add_argument('--url', help='URL of a remote image or PDF')
    target.add_argument('--base64-file', help='Path to a text file holding base64 content')

    process_parser.add_argument('--api-key', help='API key (defaults to OCRSPACE_API_KEY or OCRSPACE_APIKEY)')
    process_parser.add_argument('--endpoint', help='POST endpoint URL')
    process_parser.add_argument('--language', help='OCR language, e.g. eng or auto')
    process_parser.add_argument('--ocr-engine', help='OCR engine id, e.g. 1 or 2')
    process_parser.add_argument('--filetype', help='Override file type detection (PDF, PNG, ...)')
    process_parser.add_argument('--overlay', type=_str_to_bool, metavar='BOOL',
                                help='Request word overlay coordinates')
    process_parser.add_argument('--table', action='store_const', const=True,
                                help='Return text line by line')
    process_parser.add_argument('--scale', action='store_const', const=True,
                                help='Enable internal upscaling')
    process_parser.add_argument('--detect-orientation', action='store_const', const=True,
                                help='Auto-rotate the image')
    process_parser.add_argument('--searchable-pdf', action='store_const', const=True,
                                help='Generate a searchable PDF')
    process_parser.add_argument('--hide-text-layer', action='store_const', const=True,
                                help='Hide the text layer of the searchable PDF')
    process_parser.add_argument('--async', dest='use_async', action='store_true',
                                help='Send on a background worker and wait for the result')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'process':
        exit_code = process_document(args)
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
