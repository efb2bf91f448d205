"""
Main module entry point.

Runs the evaluation worker: ``python -m prediction_accuracy.main``.
"""

from .worker import main

if __name__ == "__main__":
    main()
