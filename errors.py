"""카드 생성 오류 분류."""


class CardGenError(Exception):
    """카드 생성 파이프라인의 기본 예외."""


class ConfigError(CardGenError):
    """알 수 없는 로드, 잘못된 카드 레코드 등 설정 오류. 해당 카드만 실패한다."""


class AssetError(CardGenError):
    """프레임·일러스트·아이콘 파일이 없거나 손상됨. 해당 카드만 실패한다."""


class PackingError(CardGenError):
    """그리드 칸 수를 rows × columns로 채울 수 없음. 해당 그리드만 실패한다."""
