"""Scheduling domain - putting quotes on the calendar"""
