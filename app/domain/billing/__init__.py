"""Billing domain - Stripe subscriptions and entitlement sync"""
