"""
Persisted cut settings.

The cut line and whether it is applied survive restarts in the settings
table, under the same keys the score-entry tooling uses.
"""

import logging
from dataclasses import dataclass
from sqlalchemy import select

from golfbot.config import Config
from golfbot.constants import TournamentConstants
from golfbot.database.models import Setting
from golfbot.services.base import BaseService
from golfbot.utils.leaderboard_exceptions import ScoreValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CutSettings:
    cut_line_score: int
    is_cut_applied: bool


class TournamentSettingsService(BaseService):
    """Loads and saves the cut line."""

    def __init__(self, session_factory):
        super().__init__(session_factory)
        self._settings = CutSettings(Config.DEFAULT_CUT_LINE_SCORE, False)

    @property
    def current(self) -> CutSettings:
        return self._settings

    async def load(self) -> CutSettings:
        """Read the cut settings, falling back to defaults for missing or unreadable values."""
        async with self.get_session() as session:
            result = await session.execute(
                select(Setting).where(Setting.key.in_([
                    TournamentConstants.SETTING_CUT_LINE_SCORE,
                    TournamentConstants.SETTING_IS_CUT_APPLIED,
                ]))
            )
            values = {setting.key: setting.value for setting in result.scalars().all()}

        raw_score = values.get(TournamentConstants.SETTING_CUT_LINE_SCORE)
        try:
            cut_line_score = int(raw_score) if raw_score is not None else Config.DEFAULT_CUT_LINE_SCORE
        except ValueError:
            logger.warning(f"Stored cut line '{raw_score}' is not a number, using default")
            cut_line_score = Config.DEFAULT_CUT_LINE_SCORE

        raw_applied = values.get(TournamentConstants.SETTING_IS_CUT_APPLIED)
        is_cut_applied = str(raw_applied).lower() in ('1', 'true')

        self._settings = CutSettings(cut_line_score, is_cut_applied)
        logger.info(f"Loaded cut settings: line={cut_line_score}, applied={is_cut_applied}")
        return self._settings

    async def _save(self, settings: CutSettings):
        async with self.get_session() as session:
            for key, value in (
                (TournamentConstants.SETTING_CUT_LINE_SCORE, str(settings.cut_line_score)),
                (TournamentConstants.SETTING_IS_CUT_APPLIED, '1' if settings.is_cut_applied else '0'),
            ):
                setting = await session.get(Setting, key)
                if setting:
                    setting.value = value
                else:
                    session.add(Setting(key=key, value=value))
        self._settings = settings

    async def apply_cut(self, cut_line_score: int) -> CutSettings:
        """Split the field at ``cut_line_score``."""
        if not Config.CUT_LINE_MIN <= cut_line_score <= Config.CUT_LINE_MAX:
            raise ScoreValidationError(
                cut_line_score,
                f"Cut line must be between {Config.CUT_LINE_MIN} and {Config.CUT_LINE_MAX}"
            )
        settings = CutSettings(cut_line_score, True)
        await self._save(settings)
        logger.info(f"Cut applied at {cut_line_score}")
        return settings

    async def clear_cut(self) -> CutSettings:
        """Remove the cut but remember the line."""
        settings = CutSettings(self._settings.cut_line_score, False)
        await self._save(settings)
        logger.info("Cut cleared")
        return settings
