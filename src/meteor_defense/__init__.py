"""
Meteor Defense: a small pygame arcade shooter.
"""
