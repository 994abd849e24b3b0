"""Manage/Edit view state for the correlation rule editor."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from src.contracts.rule import CorrelationRule
from src.correlation.editor import RuleDraft, create_draft, load_draft, to_partial
from src.correlation.store import RuleCollection

log = logging.getLogger(__name__)


class EditorMode(str, Enum):
    MANAGE = "manage"
    EDIT = "edit"


class RuleEditorSession:
    """Two-state machine: MANAGE lists rules, EDIT holds one draft.

    Leaving EDIT by ``back()`` discards the draft without a prompt;
    ``save()`` commits it to the collection first.
    """

    def __init__(
        self,
        rules: RuleCollection,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.rules = rules
        self._clock = clock
        self.mode = EditorMode.MANAGE
        self.draft: RuleDraft | None = None

    @property
    def editing(self) -> bool:
        return self.mode is EditorMode.EDIT

    def create(self) -> RuleDraft:
        self.draft = create_draft()
        self.mode = EditorMode.EDIT
        log.debug("Editor opened for a new rule")
        return self.draft

    def edit(self, rule_id: str) -> RuleDraft:
        rule = self.rules.get(rule_id)
        if rule is None:
            raise KeyError(f"Rule '{rule_id}' not found")
        self.draft = load_draft(rule)
        self.mode = EditorMode.EDIT
        log.debug("Editor opened for %s", rule_id)
        return self.draft

    def back(self) -> None:
        if self.draft is not None:
            log.debug("Draft for %s discarded", self.draft.id or "new rule")
        self.draft = None
        self.mode = EditorMode.MANAGE

    def save(self) -> CorrelationRule:
        if self.draft is None:
            raise RuntimeError("save() called outside the editor")
        rule = self.rules.commit(to_partial(self.draft), now=self._clock())
        self.draft = None
        self.mode = EditorMode.MANAGE
        return rule
