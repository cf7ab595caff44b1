# mealswipe/services/notify.py
# 알림 포트: 페이지마다 복붙되던 토스트 호출을 한 곳으로
# 서비스는 Notifier 프로토콜만 알고, 라우터는 모인 메시지를 notices로 응답에 싣는다

from __future__ import annotations
import logging
from typing import List, Protocol

from pydantic import BaseModel

log = logging.getLogger(__name__)


class Notice(BaseModel):
    level: str      # "success" | "error"
    message: str


class Notifier(Protocol):
    def success(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...


class CollectingNotifier:
    def __init__(self) -> None:
        self.notices: List[Notice] = []

    def success(self, message: str) -> None:
        log.info("notice: %s", message)
        self.notices.append(Notice(level="success", message=message))

    def error(self, message: str) -> None:
        log.warning("notice(error): %s", message)
        self.notices.append(Notice(level="error", message=message))
