"""Accounts domain - signup, login and profile"""
