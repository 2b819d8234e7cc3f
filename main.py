import argparse
import logging
import sys

from threshold_search.config import ThresholdConfig, load_config
from threshold_search.formatting import format_results
from threshold_search.retriever import (
    AdaptiveThresholdSearcher,
    InvalidConfiguration,
    validate_config,
)
from threshold_search.vector_store import load_vector_store

CLI_OVERRIDES = {
    "min_score": "min_similarity_score",
    "max_distance": "max_distance_score",
    "k_increment": "k_increment",
    "max_k": "max_k",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Return every indexed chunk whose score clears a threshold"
    )
    parser.add_argument("query", help="Text to search for")
    parser.add_argument("--config", default="config.yaml", help="Path to the YAML config")
    parser.add_argument("--min-score", type=float, help="Keep results with similarity >= this")
    parser.add_argument("--max-distance", type=float, help="Keep results with distance <= this")
    parser.add_argument("--k-increment", type=int, help="How much to widen the search each round")
    parser.add_argument("--max-k", type=int, help="Upper bound on returned results")
    return parser


def retriever_options(cfg: dict, args: argparse.Namespace) -> dict:
    """YAML `retriever:` section, with any command-line values laid over it."""
    options = dict(cfg.get("retriever") or {})
    for arg_name, field in CLI_OVERRIDES.items():
        value = getattr(args, arg_name)
        if value is not None:
            options[field] = value
    return options


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = load_config(args.config)

    logging.basicConfig(
        level=getattr(logging, cfg.get("logging", {}).get("level", "INFO")),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )
    log = logging.getLogger("main")

    # 1) Validate retriever settings before touching the index
    try:
        config = ThresholdConfig.from_dict(retriever_options(cfg, args))
        validate_config(config)
    except InvalidConfiguration as e:
        parser.error(str(e))
    except ValueError as e:
        parser.error(f"invalid retriever settings: {e}")

    # 2) Load the saved index
    try:
        db = load_vector_store(cfg)
    except FileNotFoundError as e:
        log.error(f"{e}. Build and save a FAISS index there first.")
        return 1

    # 3) Search
    searcher = AdaptiveThresholdSearcher(db, config)
    docs = searcher.search(args.query)
    log.info(f"{len(docs)} result(s) for {args.query!r}")
    print(format_results(docs))
    return 0


if __name__ == "__main__":
    sys.exit(main())
