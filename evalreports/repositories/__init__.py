"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Contains the read-only repositories behind the report views: entity lookups
(users, periods) and the joined/grouped report queries.
"""
