"""Quotes domain - quote records, quota enforcement and the quote lifecycle"""
