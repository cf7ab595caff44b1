# mealswipe/services/cleanup.py
# 찜 목록 무효 문서 정리
# - 기본값으로 복구 가능하면 덮어쓰기(fixed), 형식 자체가 깨졌으면 삭제(deleted)
# - 문서 단위 실패는 failed에 모으고 계속 진행

from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Optional

from mealswipe.db.indexes import LIKED
from mealswipe.db.models.schemas import CleanupReport
from mealswipe.services.likes import doc_recipe_id, sanitize_doc
from mealswipe.services.validator import to_iso

log = logging.getLogger(__name__)


async def cleanup_invalid_recipes(db, user_id: str, *, now: Optional[datetime] = None) -> CleanupReport:
    report = CleanupReport()
    col = db[LIKED]

    docs = await col.find({"userId": user_id}).to_list(length=None)
    log.info("cleanup: %d recipes to check (user=%s)", len(docs), user_id)

    for d in docs:
        key = d.get("_id")
        rid = doc_recipe_id(d)
        try:
            res = sanitize_doc(d)
            if res.is_valid:
                continue
            if res.sanitized_recipe is not None:
                await col.replace_one(
                    {"_id": key},
                    {
                        **res.sanitized_recipe.model_dump(),
                        "_id": key,
                        "userId": user_id,
                        "fixedAt": to_iso(now or datetime.now(timezone.utc)),
                    },
                )
                log.info("cleanup: fixed recipe %s with default values", rid)
                report.fixed.append(rid)
            else:
                await col.delete_one({"_id": key})
                log.info("cleanup: deleted invalid recipe %s", rid)
                report.deleted.append(rid)
        except Exception:
            log.exception("cleanup: failed to process recipe %s", rid)
            report.failed.append(rid)

    log.info(
        "cleanup completed: deleted=%d fixed=%d failed=%d",
        len(report.deleted), len(report.fixed), len(report.failed),
    )
    return report
