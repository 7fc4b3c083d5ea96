"""Users app package.

Custom email-login user with the participant profile used to pre-fill
accommodation guest details, plus JWT registration and login.
"""
