#!/usr/bin/env python
import json

from wle_ml.evaluation.reports import save_markdown_report


def generate_markdown_report(summary_path: str, output_path: str):
    with open(summary_path) as f:
        summary = json.load(f)

    save_markdown_report(summary, output_path)
    print(f"✓ Report generated: {output_path}")


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 3:
        print("Usage: python generate_report.py <evaluation.json> <output.md>")
        sys.exit(1)

    generate_markdown_report(sys.argv[1], sys.argv[2])
