"""Domain exceptions."""


class ValidationError(Exception):
    """入力値が不正な場合に発生する例外

    タイトルや本文が空の場合など、ストアへのリクエスト前に検出される。
    """
