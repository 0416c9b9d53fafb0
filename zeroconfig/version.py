from pathlib import Path


def get_version() -> str:
    return (Path(__file__).parent / 'version').read_text().strip()
