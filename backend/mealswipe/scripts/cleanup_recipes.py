# mealswipe/scripts/cleanup_recipes.py
# 운영용: 특정 사용자 찜 목록의 무효 문서 점검/정리
# 사용: python -m mealswipe.scripts.cleanup_recipes <userId> [--dry-run]
import argparse
import asyncio
from typing import List

from mealswipe.db.init import close_db, init_db
from mealswipe.db.indexes import LIKED
from mealswipe.services.cleanup import cleanup_invalid_recipes
from mealswipe.services.likes import doc_recipe_id, sanitize_doc

def _problems(docs: List[dict]) -> List[tuple]:
    bad = []
    for d in docs:
        res = sanitize_doc(d)
        if not res.is_valid:
            bad.append((doc_recipe_id(d), d.get("strMeal"), res.missing_fields, res.sanitized_recipe is not None))
    return bad

async def main(user_id: str, dry_run: bool = False):
    db = await init_db()
    try:
        if dry_run:
            docs = await db[LIKED].find({"userId": user_id}).to_list(length=None)
            bad = _problems(docs)
            print(f"checked: {len(docs)}, issues: {len(bad)}")
            for rid, title, missing, fixable in bad[:20]:
                print("-", rid, "/", title, "=>", missing, "| fixable:", fixable)
            return
        report = await cleanup_invalid_recipes(db, user_id)
        print(f"deleted={len(report.deleted)} fixed={len(report.fixed)} failed={len(report.failed)}")
    finally:
        await close_db()

if __name__ == "__main__":
    p = argparse.ArgumentParser(description="liked_recipes 무효 문서 정리")
    p.add_argument("user_id")
    p.add_argument("--dry-run", action="store_true", help="정리하지 않고 점검만")
    args = p.parse_args()
    asyncio.run(main(args.user_id, args.dry_run))
