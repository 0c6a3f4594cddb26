"""Clients domain - the business's client records"""
