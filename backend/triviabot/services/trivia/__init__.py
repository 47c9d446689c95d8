"""Trivia domain services: questions, answers, rounds and scoring.

This package holds the question lifecycle and should be imported by HTTP
routes, the Slack command layer and the rotation scheduler, keeping
transport concerns separated from round mechanics.
"""
