import sys
import json
import logging
import argparse
from pathlib import Path

from .config import OutlineConfig
from .extractor import SectionExtractor
from .selection import count_selected
from .utils.metrics import SelectionStats

logger = logging.getLogger("Outliner")

TEXT_SUFFIXES = {".txt", ".md", ".csv", ".json"}
HTML_SUFFIXES = {".html", ".htm"}


def outline_file(extractor: SectionExtractor, path: Path):
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return extractor.extract_pdf(str(path))
    if suffix in HTML_SUFFIXES:
        return extractor.extract_from_html(path.read_text(encoding="utf-8"))
    text = path.read_text(encoding="utf-8", errors="replace")
    return extractor.extract_from_text(text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Derive a section outline from documents.")
    parser.add_argument("inputs", nargs="+", help="PDF, HTML or text files")
    parser.add_argument("-o", "--output-dir", default="outputs/Outlines",
                        help="Directory for <name>.json outlines")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--include-unextracted", action="store_true",
                        help="Keep placeholder sections in assembled context")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = OutlineConfig()
    config.INCLUDE_UNEXTRACTED_IN_CONTEXT = args.include_unextracted
    extractor = SectionExtractor(config)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    failures = 0
    for raw_path in args.inputs:
        path = Path(raw_path)
        suffix = path.suffix.lower()
        if suffix != ".pdf" and suffix not in HTML_SUFFIXES and suffix not in TEXT_SUFFIXES:
            logger.warning(f"Skipping unsupported file: {path.name}")
            continue

        logger.info(f"Processing: {path.name}")
        try:
            tree = outline_file(extractor, path)
        except Exception as e:
            logger.error(f"  Outline failed for {path.name}: {e}")
            failures += 1
            continue

        counts = count_selected(tree)
        result = {
            "metadata": {
                "source_file": path.name,
                "strategy": extractor.last_strategy,
                "stats": SelectionStats.calculate(tree),
            },
            "sections": tree.to_dict(),
        }
        output_path = output_dir / f"{path.stem}.json"
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(result, f, ensure_ascii=False, indent=2)
        logger.info(f"  ✓ {counts['total']} sections ({extractor.last_strategy}) saved to {output_path}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
