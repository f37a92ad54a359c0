#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PageFlow CLI - convert an HTML file to DOCX or PDF

Usage:
    pageflow page.html -o page.docx
    pageflow slides.html -o slides.docx --format slide
    pageflow report.html -o report.pdf --target pdf --orientation landscape
"""

import sys
import asyncio
import argparse
from pathlib import Path
from typing import List, Optional

from config.logging_config import get_logger
from .exceptions import ConversionError
from .hf_converter import convert_html_file_to_docx_hf
from .page_format import ConversionOptions, LANDSCAPE, PORTRAIT, SLIDE
from .pdf_converter import convert_html_file_to_pdf

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pageflow',
        description='Convert HTML to paginated DOCX (high-fidelity) or PDF (print)',
    )
    parser.add_argument('input', help='HTML file to convert')
    parser.add_argument('--output', '-o', help='Output file (default: input name with target extension)')
    parser.add_argument('--target', choices=['docx', 'pdf'], help='Output type (default: from output extension, else docx)')
    parser.add_argument('--format', default=None, choices=['A4', SLIDE], help='Page format (default: A4)')
    parser.add_argument('--orientation', default=PORTRAIT, choices=[PORTRAIT, LANDSCAPE], help='A4 orientation')
    parser.add_argument('--title', help='Document title metadata (DOCX)')
    return parser


def resolve_target(args) -> str:
    if args.target:
        return args.target
    if args.output and Path(args.output).suffix.lower() == '.pdf':
        return 'pdf'
    return 'docx'


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    input_file = Path(args.input)
    if not input_file.exists():
        print(f"❌ Input file not found: {input_file}")
        return 1

    target = resolve_target(args)
    output_file = Path(args.output) if args.output else input_file.with_suffix(f'.{target}')
    options = ConversionOptions(format=args.format, orientation=args.orientation, title=args.title)

    try:
        if target == 'pdf':
            result = asyncio.run(convert_html_file_to_pdf(input_file, output_file, options))
        else:
            result = asyncio.run(convert_html_file_to_docx_hf(input_file, output_file, options))
    except ConversionError as e:
        logger.error(str(e))
        print(f"❌ {e}")
        return 1

    print(f"✅ {result}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
