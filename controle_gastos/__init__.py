"""
Controle de Gastos - Source Package

A small client for recording and reviewing personal expenses
(description, date, amount) kept by a remote Gastos API.

DESIGN PRINCIPLES:
1. The server is the source of truth (list and total are always re-fetched)
2. Validate locally before any network call
3. Failures become a message, never a blank screen
4. State is owned explicitly, never global
"""

__version__ = "1.0.0"
__author__ = "Controle de Gastos Team"
