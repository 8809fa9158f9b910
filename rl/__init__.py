"""Autopilot training tools for Retro Space (stable-baselines3)"""
