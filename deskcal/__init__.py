"""deskcal — year calendar with date comments, plus a pocket calculator.

Renders monthly grids Monday-first, marks weekends and commented dates,
keeps per-date comments in an exportable CSV store, and runs calculator key
sequences against an explicit state with one memory register.

Usage:
    python -m deskcal show 2 --year 2024      # Month grid
    python -m deskcal addc 1 6 Dentist        # Comment a date
    python -m deskcal export                  # Write comments_<year>.csv
    python -m deskcal calc 9 sqrt M+          # Calculator
"""
