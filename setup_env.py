"""Post-clone environment setup helper.

Run once after creating the env and installing the project:

    python -m venv .venv && source .venv/bin/activate
    pip install -e ".[test]"
    python setup_env.py

This script:
1. Verifies all required imports resolve correctly.
2. Checks that the VADER lexicon loads and scores a sample sentence.
3. Reports which AZURE_OPENAI_* variables are still unset.
"""

import os
import sys

from dotenv import load_dotenv

load_dotenv()


def verify_imports() -> None:
    print("Verifying core imports...")
    required = [
        ("requests", "requests"),
        ("yaml", "PyYAML"),
        ("dotenv", "python-dotenv"),
        ("vaderSentiment", "vaderSentiment"),
    ]
    all_ok = True
    for mod, pkg in required:
        try:
            __import__(mod)
            print(f"  [OK] {pkg}")
        except ImportError:
            print(f"  [MISSING] {pkg}  →  run: pip install {pkg}")
            all_ok = False

    if not all_ok:
        print("\nSome packages are missing. Run:  pip install -e .")
        sys.exit(1)


def verify_lexicon() -> None:
    print("\nVerifying VADER lexicon...")
    from cast_sentiment.providers.sentiment import SentimentScorer

    item = SentimentScorer().score("An absolutely wonderful performance.")
    print(f"  [OK] sample scored {item.compound:+.4f} ({item.label})")


def check_environment() -> None:
    print("\nChecking generation endpoint variables...")
    for key in ("AZURE_OPENAI_ENDPOINT", "AZURE_OPENAI_DEPLOYMENT", "AZURE_OPENAI_KEY"):
        status = "set" if os.getenv(key) else "MISSING — add it to .env"
        print(f"  {key:26} {status}")


if __name__ == "__main__":
    print("=" * 60)
    print("  cast-sentiment — Environment Setup Check")
    print("=" * 60)
    verify_imports()
    verify_lexicon()
    check_environment()
    print("\n" + "=" * 60)
    print("  Setup complete. You can now run: python run_pipeline.py")
    print("=" * 60)
