"""
Utility modules.

    - timeit.py: Stage timing for pipeline logging
"""
