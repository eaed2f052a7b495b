"""
Business Layer

Surfaces around the analysis engine:
- config: YAML-backed analysis configuration
- analysis: snapshot loading and the analysis service
- cache: memoizing wrapper around the analyzer
- tour: guided tour rules
- formatters: reason-code and analysis rendering
- cli: command line
"""
