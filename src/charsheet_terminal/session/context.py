"""Objects shared by the controller and every command handler."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from charsheet_terminal.config import AppConfig
from charsheet_terminal.services.character import CharacterRecord
from charsheet_terminal.services.skills import Skills
from charsheet_terminal.session.blocks import BlockStack
from charsheet_terminal.session.output import OutputScheduler

if TYPE_CHECKING:
    from charsheet_terminal.session.resolver import CommandResolver

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    config: AppConfig
    output: OutputScheduler
    blocks: BlockStack
    character: CharacterRecord
    rng: random.Random = field(default_factory=random.Random)
    resolver: CommandResolver | None = None
    exit_requested: bool = False

    @property
    def skills(self) -> Skills:
        return Skills(self.character)

    @property
    def color(self) -> bool:
        return self.output.color

    def request_exit(self) -> None:
        logger.info("Exit requested")
        self.exit_requested = True
