"""src/reqline/utils/__init__.py"""
