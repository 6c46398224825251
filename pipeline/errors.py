"""
パイプライン例外定義

リソース取得・プロファイル解決・SHACL検証の各段階で発生するエラーを定義します。
検証結果としての「不適合」はエラーではなく、Reportとして返されます。
"""

from typing import Optional


class ValidatorError(Exception):
    """パイプライン例外の基底クラス"""


class FetchError(ValidatorError):
    """リソース取得時の通信エラー（接続拒否、DNS失敗、転送中断、HTTPエラー応答）"""

    def __init__(self, identifier: str, reason: str, status_code: Optional[int] = None):
        self.identifier = identifier
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Could not fetch {identifier}: {reason}")


class FormatError(ValidatorError):
    """Content-Typeが未対応、または本文をデコードできない"""

    def __init__(self, identifier: str, reason: str, media_type: Optional[str] = None):
        self.identifier = identifier
        self.reason = reason
        self.media_type = media_type
        super().__init__(f"Could not decode {identifier}: {reason}")


class ProfileMissingError(ValidatorError):
    """リソースがプロファイル（dct:conformsTo）を宣言していない"""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Resource {identifier} does not state its profile")


class ArtifactMissingError(ValidatorError):
    """プロファイルにSHACL検証アーティファクトが定義されていない"""

    def __init__(self, profile: str):
        self.profile = profile
        super().__init__(f"Profile {profile} does not define a SHACL validation artifact")


class EngineError(ValidatorError):
    """検証コンテキストへのロード中の予期しない失敗（適合性判定とは無関係）"""
