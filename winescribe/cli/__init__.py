"""Command-line tools for winescribe.

- ``python -m winescribe.cli.generate``: run the generation pipeline for
  one wine and print the post (or JSON with facts, verdict and usage).
- ``python -m winescribe.cli``: same as ``generate``.
"""
