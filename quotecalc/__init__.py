# ==============================================================================
# QUOTECALC PACKAGE INITIALIZATION
# ==============================================================================
# Web design price calculator backend
# Supports: PostgreSQL, MySQL
# ==============================================================================

"""
QuoteCalc
=========

Turns a catalog of project types, priced features and priced pages into
a dollar estimate, and stores estimates as quotes whose line prices never
change afterwards.

Features:
---------
- Pure pricing engine (fixed and hourly features, per-page pricing)
- One statement API over PostgreSQL (asyncpg) and MySQL (mysql-connector)
- Atomic quote writes with cascade delete of line items
- Installer: schema creation and demo catalog

Usage:
------
    uvicorn quotecalc.main:app --reload
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
