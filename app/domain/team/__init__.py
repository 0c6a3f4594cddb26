"""Team domain - Pro-only team members and job assignment"""
