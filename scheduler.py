"""배치 실행 모듈 — 카드 렌더링을 병렬로 돌리고, 그룹별로 모두 끝나면 그리드를 만든다.

카드 한 장, 그리드 한 장이 각각 독립된 작업 단위다. 한 단위가 실패해도
로그와 리포트에 남기고 나머지는 계속한다. 재시도는 하지 않는다.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image

from config import get_lord
from content.assets import AssetStore
from content.cards import DECK_PLAY, Card
from content.icons import IconSet
from errors import CardGenError
from renderer.canvas import save_image
from renderer.grid import pack, weighted
from renderer.layers import LayerCompositor
from renderer.layout import CardLayout
from renderer.text import BASE_DENSITY, OverlayCache

logger = logging.getLogger(__name__)


@dataclass
class Failure:
    """실패한 작업 단위."""
    unit: str
    error: str


@dataclass
class BatchReport:
    """배치 결과."""
    rendered: list[Path] = field(default_factory=list)
    grids: list[Path] = field(default_factory=list)
    failures: list[Failure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class RenderedCard:
    card: Card
    image: Image.Image
    path: Path


class BatchScheduler:
    """카드 렌더링과 그리드 생성을 관리한다."""

    def __init__(self, config: dict, lords, assets: AssetStore | None = None,
                 icons: IconSet | None = None):
        paths = config["paths"]
        render = config["render"]
        self._lords = lords
        self._assets = assets or AssetStore(paths["frames"], paths["illustrations"])
        self._icons = icons or IconSet(paths["icons"])
        self._output = Path(paths["output"])
        self._version = render.get("version", "v1.0")
        self._font_family = render.get("font_family", "card")
        self._scale = render.get("density", BASE_DENSITY) / BASE_DENSITY
        self._overlays = OverlayCache(scale=self._scale)
        self._cell_size = (config["grid"].get("cell_width", 0), config["grid"].get("cell_height", 0))
        self._compositor = LayerCompositor()
        self._report = BatchReport()

    async def run(self, decks: dict[str, dict[str, list]]) -> BatchReport:
        """모든 덱의 카드를 렌더링하고 그리드를 만든다.

        Args:
            decks: {덱 종류: {로드 id: [레코드, ...]}}
        """
        self._report = BatchReport()
        groups: dict[tuple[str, str | None], list[asyncio.Task]] = {}

        for deck, lords in decks.items():
            for lord_id, records in lords.items():
                key = (deck, lord_id) if deck == DECK_PLAY else (deck, None)
                tasks = groups.setdefault(key, [])
                for index, record in enumerate(records):
                    tasks.append(asyncio.create_task(
                        self._card_unit(deck, lord_id, index, record)
                    ))

        logger.info("카드 %d장 렌더링 시작", sum(len(t) for t in groups.values()))
        grid_tasks = [
            asyncio.create_task(self._grid_unit(key, tasks))
            for key, tasks in groups.items()
        ]
        await asyncio.gather(*grid_tasks, return_exceptions=True)

        logger.info("완료: 카드 %d장, 그리드 %d장, 실패 %d건",
                    len(self._report.rendered), len(self._report.grids),
                    len(self._report.failures))
        return self._report

    # ------------------------------------------------------------------
    # 카드 단위
    # ------------------------------------------------------------------

    async def _card_unit(self, deck: str, lord_id: str, index: int, record) -> RenderedCard | None:
        """카드 한 장을 렌더링·저장한다. 실패하면 기록하고 None을 반환한다."""
        unit = f"{deck}/{lord_id}#{index}"
        try:
            card = Card.from_record(deck, lord_id, index, record)
            unit = card.describe()
            image = await self.render_card(card)
            path = self._output / "cards" / deck / f"{card.output_name}.png"
            await asyncio.to_thread(save_image, image, path)
        except CardGenError as e:
            self._fail(unit, e)
            return None
        except Exception as e:
            logger.exception("카드 렌더링 중 예기치 않은 오류: %s", unit)
            self._fail(unit, e)
            return None

        logger.info("카드 저장: %s", path)
        self._report.rendered.append(path)
        return RenderedCard(card, image, path)

    async def render_card(self, card: Card) -> Image.Image:
        """카드 한 장을 합성한다. 에셋 로드와 오버레이 렌더링은 동시에 진행한다."""
        lord = get_lord(self._lords, card.lord)
        summary = card.deck != DECK_PLAY
        actions = [] if summary else [a for a, text in (("use", card.use_text), ("play", card.play_text)) if text]

        frame, illustration, *icon_images = await asyncio.gather(
            asyncio.to_thread(self._assets.frame, card.frame_key),
            asyncio.to_thread(self._assets.illustration, card.illustration_key, card.deck),
            *(asyncio.to_thread(self._icons.get, action, card.lord) for action in actions),
        )
        icons = dict(zip(actions, icon_images))

        layout = CardLayout(frame.size, lord, version=self._version,
                            font_family=self._font_family, scale=self._scale)
        specs = [spec for _, spec in (layout.summary_overlays(card) if summary else layout.overlays(card))]
        images = await asyncio.gather(
            *(asyncio.to_thread(self._overlays.render, spec) for spec in specs)
        )
        rendered = dict(zip(specs, images))

        return await asyncio.to_thread(
            self._compose_card, layout, card, frame, illustration, icons, rendered, summary
        )

    def _compose_card(self, layout: CardLayout, card: Card, frame: Image.Image,
                      illustration: Image.Image, icons: dict, rendered: dict,
                      summary: bool) -> Image.Image:
        """레이어 목록(일러스트 리사이즈 포함)을 만들고 합성한다. 워커 스레드에서 실행된다."""
        if summary:
            layers = layout.summary_layers(card, illustration, rendered.__getitem__)
        else:
            layers = layout.layers(card, illustration, icons, rendered.__getitem__)
        return self._compositor.compose(frame, layers)

    # ------------------------------------------------------------------
    # 그리드 단위
    # ------------------------------------------------------------------

    async def _grid_unit(self, key: tuple[str, str | None], tasks: list[asyncio.Task]) -> Path | None:
        """그룹의 카드가 모두 끝난 뒤 그리드를 만든다."""
        deck, lord_id = key
        name = f"{deck}_{lord_id}" if lord_id else deck
        results = await asyncio.gather(*tasks, return_exceptions=True)
        cards = [r for r in results if isinstance(r, RenderedCard)]
        if not cards:
            logger.warning("그리드 건너뜀 (렌더링된 카드 없음): %s", name)
            return None

        if deck == DECK_PLAY:
            images = weighted([(c.image, c.card.rarity) for c in cards])
        else:
            images = [c.image for c in cards]

        cell_w, cell_h = self._cell_size
        if not (cell_w and cell_h):
            cell_w, cell_h = cards[0].image.size

        try:
            sheet = await asyncio.to_thread(pack, images, cell_w, cell_h)
            path = await asyncio.to_thread(save_image, sheet, self._output / "grids" / f"{name}.png")
        except CardGenError as e:
            self._fail(f"grid {name}", e)
            return None
        except Exception as e:
            logger.exception("그리드 생성 중 예기치 않은 오류: %s", name)
            self._fail(f"grid {name}", e)
            return None

        logger.info("그리드 저장: %s (%d칸)", path, len(images))
        self._report.grids.append(path)
        return path

    def _fail(self, unit: str, error: Exception) -> None:
        logger.error("실패: %s (%s)", unit, error)
        self._report.failures.append(Failure(unit, str(error)))
