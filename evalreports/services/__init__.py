"""서비스 패키지 — 리포트 조립 및 집계 로직.

Services package — Report assembly and aggregation logic.
"""
