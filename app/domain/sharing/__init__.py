"""Sharing domain - public proposal links for quotes"""
