# np_chunker/main.py

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for robust execution
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from npchunk.annotator import MissingAnnotationsError, NounPhraseChunker
from npchunk.config import load_config
from npchunk.io_utils import load_document, save_document


def main():
    """
    Main command-line interface for the noun phrase chunker.

    This script annotates one document with noun chunks. It performs the
    following steps:
    1.  Loads the configuration file (`config.yaml`), applying any resource
        paths given on the command line.
    2.  Loads the rules and the POS tag dictionary.
    3.  Loads the input document (tokens with POS tags, and sentences).
    4.  Adds a noun chunk annotation for every base noun phrase found.
    5.  Writes the annotated document to the output JSON file.
    """
    parser = argparse.ArgumentParser(
        description="Mark base noun phrases in a POS-tagged document using transformation rules.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Path to the input document JSON file (sentences and POS-tagged tokens)."
    )
    parser.add_argument(
        "--output",
        required=True,
        help="Path to write the annotated document JSON file."
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to the configuration YAML file."
    )
    parser.add_argument(
        "--rules",
        default=None,
        help="Override the rules file named in the configuration."
    )
    parser.add_argument(
        "--pos-dict",
        dest="pos_dict",
        default=None,
        help="Override the POS tag dictionary named in the configuration."
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a per-sentence progress bar."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging."
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        # 1. Load configuration
        print(f"Loading configuration from {args.config}...")
        cfg = load_config(args.config)

        if args.rules:
            cfg.paths["rules"] = args.rules
        if args.pos_dict:
            cfg.paths["pos_tag_dict"] = args.pos_dict
        if args.progress:
            cfg.show_progress = True

        # 2. Load rules and POS tag dictionary
        print(f"Loading rules from {cfg.paths['rules']}...")
        print(f"Loading POS tag dictionary from {cfg.paths['pos_tag_dict']}...")
        annotator = NounPhraseChunker(cfg)

        # 3. Load input document
        print(f"Loading document from {args.input}...")
        doc = load_document(args.input)

        # 4. Chunk
        print("Chunking...")
        added = annotator.annotate(doc)

        # 5. Write output
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        save_document(output_path, doc)

        print(f"\nSuccessfully wrote {len(added)} {cfg.annotation_name} annotations to {args.output}")

    except (OSError, ValueError, TypeError, KeyError, MissingAnnotationsError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
