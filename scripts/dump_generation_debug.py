"""
Debug dump — runs one generation call for a subject and shows every stage:
the composed prompt, the raw payload, which extraction tier succeeded, and
the scored snippets. Writes the same data to output/generation_debug.json.

Run with:
    PYTHONPATH=. python scripts/dump_generation_debug.py tweet "Tom Hanks" "Forrest Gump" "Cast Away"
    PYTHONPATH=. python scripts/dump_generation_debug.py review "Cast Away" "Tom Hanks" --payload raw.txt
"""

import json
import os
import sys

from dotenv import load_dotenv

load_dotenv()

from cast_sentiment.core.config import GenerationSettings, load_config
from cast_sentiment.pipeline.aggregate import aggregate
from cast_sentiment.pipeline.extractor import extract_with_tier
from cast_sentiment.pipeline.prompt import STYLES, build_prompt
from cast_sentiment.providers.generation import AzureOpenAIGenerator, StaticTextGenerator
from cast_sentiment.providers.sentiment import SentimentScorer

DIVIDER = "=" * 70


def main(argv: list) -> int:
    if len(argv) < 2 or argv[0] not in STYLES:
        print(f"Usage: dump_generation_debug.py {{{'|'.join(STYLES)}}} <subject> [context ...] [--payload FILE]")
        return 1

    payload_file = None
    if "--payload" in argv:
        idx = argv.index("--payload")
        payload_file = argv[idx + 1]
        argv = argv[:idx] + argv[idx + 2:]

    style = STYLES[argv[0]]
    subject, context = argv[1], argv[2:]

    if payload_file:
        with open(payload_file, encoding="utf-8") as f:
            generator = StaticTextGenerator(f.read())
    else:
        overrides = load_config().get("generation") if os.path.exists("config.yaml") else None
        generator = AzureOpenAIGenerator(GenerationSettings.from_env(overrides))

    prompt = build_prompt(subject, context, style.count, style)
    print(f"\n{DIVIDER}\n  PROMPT ({style.name})\n{DIVIDER}")
    print(prompt.user_prompt)

    raw = generator.generate(prompt)
    print(f"\n{DIVIDER}\n  RAW PAYLOAD ({len(raw)} chars)\n{DIVIDER}")
    print(raw)

    texts, tier = extract_with_tier(raw, prompt.field_name, prompt.count)
    scorer = SentimentScorer()
    result = aggregate([scorer.score(t) for t in texts])

    print(f"\n{DIVIDER}\n  EXTRACTED  tier={tier}  {len(texts)}/{prompt.count}\n{DIVIDER}")
    for i, item in enumerate(result.items, start=1):
        disp = item.text[:56] + ".." if len(item.text) > 58 else item.text
        print(f"  {i:2}. [{item.label:8} {item.compound:+.4f}]  {disp}")
    print(f"\n  AVERAGE {result.average_compound:+.4f}  →  {result.overall_label}\n")

    os.makedirs("output", exist_ok=True)
    with open(os.path.join("output", "generation_debug.json"), "w", encoding="utf-8") as f:
        json.dump({
            "style": style.name,
            "subject": subject,
            "context": context,
            "user_prompt": prompt.user_prompt,
            "raw": raw,
            "tier": tier,
            "items": [vars(item) for item in result.items],
            "average_compound": result.average_compound,
            "overall_label": result.overall_label,
        }, f, indent=2)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
