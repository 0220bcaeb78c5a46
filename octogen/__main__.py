"""Entry point: python -m octogen

Reads the API document (spec/openapi.yaml by default) and writes one Java
record or enum per resolved type under generated/.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .codegen import generate
from .config import settings_from_env
from .context_builder import build_context
from .errors import GeneratorError
from .loader import load_spec

logger = logging.getLogger("octogen")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="octogen",
        description="Generate Java DTOs from an OCTO API document.",
    )
    parser.add_argument("--spec", help="API document (YAML or JSON)")
    parser.add_argument("--output", help="output root directory")
    parser.add_argument("--package", help="base Java package")
    parser.add_argument("--request-namespace", help="sub-package for request body types")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every registered type")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = settings_from_env().override(
        spec_path=args.spec,
        output_dir=args.output,
        base_package=args.package,
        request_namespace=args.request_namespace,
    )

    try:
        spec = load_spec(settings.spec_path)
        context = build_context(spec, settings)
    except GeneratorError as exc:
        logger.error("%s", exc)
        return 1

    generate(context, settings.output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
