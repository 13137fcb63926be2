"""Generated-snippet sentiment pipeline entry point.

Usage:
    python run_pipeline.py [config.yaml]

Loads config.yaml, builds the Azure OpenAI generator from AZURE_OPENAI_*
environment variables, generates and scores reviews for every configured
movie and tweets for every configured actor, and writes
output/snippet_sentiment.csv plus output/summary.json.
"""

import sys
from dotenv import load_dotenv

load_dotenv()  # must precede package imports so env vars are available at module load

from cast_sentiment.core.config import load_config  # noqa: E402
from cast_sentiment.core.errors import ConfigurationError  # noqa: E402
from cast_sentiment.core.logger import logger  # noqa: E402
from cast_sentiment.pipeline.engine import (  # noqa: E402
    SnippetPipeline, requests_from_config, write_outputs,
)


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline. Returns 0 on success, 1 on failure."""
    argv = sys.argv[1:] if argv is None else argv
    config_path = argv[0] if argv else "config.yaml"

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        logger.error(f"run_pipeline: failed to load config: {exc}")
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    try:
        pipeline = SnippetPipeline.from_config(config)
    except ConfigurationError as exc:
        logger.error(f"run_pipeline: {exc}")
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    requests = requests_from_config(config)
    if not requests:
        print("ERROR: config lists no movies or actors", file=sys.stderr)
        return 1

    output_dir = config.get("output_dir", "output")
    outcomes = pipeline.run_batch(requests, max_workers=int(config.get("max_workers", 4)))
    write_outputs(outcomes, output_dir)

    failed = [o for o in outcomes if not o.ok]
    for outcome in outcomes:
        if outcome.ok:
            print(
                f"  {outcome.request.style.name:6}  {outcome.request.subject:30.30}  "
                f"{len(outcome.result.items):3} items  "
                f"avg={outcome.result.average_compound:+.4f}  {outcome.result.overall_label}"
            )
        else:
            print(f"  {outcome.request.style.name:6}  {outcome.request.subject:30.30}  FAILED: {outcome.error}")

    if len(failed) == len(outcomes):
        print("ERROR: every subject failed", file=sys.stderr)
        return 1

    print(f"SUCCESS: {len(outcomes) - len(failed)}/{len(outcomes)} subjects written to {output_dir}/")
    logger.info(f"run_pipeline: completed — {len(failed)} failures")
    return 0


if __name__ == "__main__":
    sys.exit(main())
