"""Admin domain - role-gated account administration"""
