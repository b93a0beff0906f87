"""
Audit onboarding state across all users.

Reports users whose stored onboarding_step, completion flags and
profile_completion disagree. Read-only.

Run: python scripts/audit_onboarding.py [--limit 500]
"""

import argparse
import asyncio

from dotenv import load_dotenv
load_dotenv()

from haady.db.client import get_service_client
from haady.db.users import fetch_user_profile
from haady.onboarding.audit import audit_snapshot

PAGE_SIZE = 100


async def audit(limit: int) -> int:
    sb = get_service_client()

    print("=" * 60)
    print("ONBOARDING AUDIT")
    print("=" * 60)

    checked = 0
    flagged = 0
    offset = 0

    while checked < limit:
        page = (
            sb.table("users")
            .select("id, profile_completion")
            .order("created_at")
            .range(offset, offset + PAGE_SIZE - 1)
            .execute()
        )
        if not page.data:
            break

        for row in page.data:
            if checked >= limit:
                break
            checked += 1

            snapshot = await fetch_user_profile(row["id"], client=sb)
            if snapshot is None:
                continue

            findings = audit_snapshot(snapshot, row.get("profile_completion"))
            if findings:
                flagged += 1
                print(f"\n{row['id']} (@{snapshot.username or '-'})")
                for finding in findings:
                    print(f"   - [{finding.kind}] {finding.message}")

        offset += PAGE_SIZE

    print(f"\nChecked {checked} users, {flagged} with findings")
    return flagged


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--limit", type=int, default=500, help="Max users to check")
    args = parser.parse_args()
    asyncio.run(audit(args.limit))


if __name__ == "__main__":
    main()
