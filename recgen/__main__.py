"""python -m recgen のエントリポイント。"""

from .cli import app

if __name__ == "__main__":
    app()
