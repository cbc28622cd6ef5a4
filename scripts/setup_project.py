#!/usr/bin/env python
from pathlib import Path


def setup_directories():
    dirs = [
        "data/raw",
        "artifacts",
    ]
    for d in dirs:
        Path(d).mkdir(parents=True, exist_ok=True)
    print("✓ Project directories created")


def create_gitkeep_files():
    gitkeep = Path("data/raw") / ".gitkeep"
    gitkeep.touch()
    print("✓ .gitkeep files created")


if __name__ == "__main__":
    setup_directories()
    create_gitkeep_files()
    print("✓ Project setup complete (place pml-training.csv and pml-testing.csv in data/raw)")
