"""메인 — 덱 데이터로 카드 이미지와 그리드(컨택트 시트)를 일괄 생성한다."""

import asyncio
import logging
import sys
from pathlib import Path

from config import load_config, load_lords
from content.cards import load_decks
from errors import CardGenError
from scheduler import BatchScheduler

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s")
logging.getLogger("PIL").setLevel(logging.WARNING)


async def main(config_path: Path | None = None) -> int:
    """배치를 실행하고 종료 코드를 반환한다 (하나라도 실패하면 1)."""
    config = load_config(config_path)

    try:
        lords = load_lords(config)
        decks = load_decks(Path(config["paths"]["cards"]))
    except (CardGenError, OSError, ValueError) as e:
        logging.error("덱/설정 로드 실패: %s", e)
        return 1

    logging.info("로드 %d개, 덱 %d종", len(lords), len(decks))
    scheduler = BatchScheduler(config, lords)
    report = await scheduler.run(decks)

    for failure in report.failures:
        logging.error("  %s: %s", failure.unit, failure.error)
    return 0 if report.ok else 1


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main(Path(sys.argv[1]) if len(sys.argv) > 1 else None)))
    except KeyboardInterrupt:
        logging.info("종료")
