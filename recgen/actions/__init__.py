# アクションモジュール
# 記録されたブラウザ操作のスキーマ定義と、記録ファイルのローダーを提供

from . import schema  # noqa: F401
from . import loader  # noqa: F401
