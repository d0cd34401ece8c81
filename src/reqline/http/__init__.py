"""src/reqline/http/__init__.py"""
