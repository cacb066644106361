#!/usr/bin/env python3
"""run_demo.py — Exercise both endpoints against a live API.

Usage:
    python scripts/run_demo.py              # default: http://localhost:8000
    python scripts/run_demo.py --base-url http://localhost:8000 --skip-consultation
"""

from __future__ import annotations

import argparse
import sys
import uuid
from datetime import datetime, timezone

import httpx

DEMO_DESCRIPTIONS = [
    "I run a small bakery in downtown Portland",
    "We are a three-chair dental clinic; most patients book appointments by phone.",
]


def run_demo(base_url: str, skip_consultation: bool) -> None:
    print("═" * 60)
    print(" AI Recommendation Funnel — Demo")
    print("═" * 60)
    print(f"Target: {base_url}\n")

    # Health check
    try:
        resp = httpx.get(f"{base_url}/api/health", timeout=5)
        resp.raise_for_status()
        print(f"✅ Health check: {resp.json()}\n")
    except Exception as exc:
        print(f"❌ Health check failed: {exc}")
        print("   Make sure the server is running: uvicorn advisor.main:app --reload")
        sys.exit(1)

    last_recommendations: list[dict] = []
    for description in DEMO_DESCRIPTIONS:
        print(f"─── {description[:56]}")
        resp = httpx.post(
            f"{base_url}/api/recommendations",
            json={"businessDescription": description},
            timeout=60,
        )
        data = resp.json()
        if resp.status_code != 200:
            print(f"  ❌ {resp.status_code}: {data.get('error')}\n")
            continue
        last_recommendations = data["recommendations"]
        for rec in last_recommendations:
            print(
                f"  {rec['id']}. {rec['title']} [{rec['category']}, {rec['difficulty']}] "
                f"{rec['estimatedCost']} · {rec['timeToImplement']}"
            )
        print()

    if skip_consultation or not last_recommendations:
        return

    payload = {
        "contactInfo": {
            "firstName": "Demo",
            "lastName": "Visitor",
            "email": "demo.visitor@example.com",
            "preferredContactMethod": "email",
        },
        "businessInfo": {
            "businessName": "Demo Dental",
            "website": "",
            "businessDescription": DEMO_DESCRIPTIONS[-1],
        },
        "projectDetails": {
            "selectedRecommendations": [r["title"] for r in last_recommendations[:2]],
        },
        "metadata": {
            "source": "demo-script",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "sessionId": uuid.uuid4().hex,
            "originalRecommendations": last_recommendations[:2],
        },
    }
    resp = httpx.post(f"{base_url}/api/consultation-request", json=payload, timeout=60)
    print(f"─── Consultation request → {resp.status_code}")
    print(f"  {resp.json()}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run recommendation funnel demo")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API base URL")
    parser.add_argument("--skip-consultation", action="store_true", help="Do not submit a lead")
    args = parser.parse_args()
    run_demo(args.base_url, args.skip_consultation)
