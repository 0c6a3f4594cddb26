"""Checklists domain - cleaning checklist templates and per-quote checklists"""
