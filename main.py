"""Health Signal — CLI entry point."""

import logging
import sys

from healthsignal import analyze, generate_report

if __name__ == "__main__":
    args = [a for a in sys.argv[1:] if a != "-v"]
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv[1:] else logging.WARNING)
    result = analyze(args[0] if args else "sample_entries.json")
    print(generate_report(result))
