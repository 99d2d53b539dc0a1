"""Kilocode resolver core for GitHub Actions.

This package implements the decision and templating layer of the Kilocode
resolver action, providing:
- Webhook event parsing and trigger classification
- Kilocode CLI configuration and command line generation
- Agent prompt, commit message, PR body and status comment rendering
- Branch naming for fixes
- Credential validation and settings from environment variables
"""
