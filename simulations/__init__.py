# simulations/__init__.py
"""
Parameter sweeps for the memory contention simulator.

Run a sweep via:
    python -m simulations.sweep --processors 2 4 --max-modules 256 --out output.csv
"""
