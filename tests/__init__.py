"""
Test Suite for clinimpact

- Unit tests for the local scenario parser and its rule tables
- Parameter models, derived metrics and capacity planning
- Remote extraction routing (Anthropic client mocked)
- Server tools and the audit log
"""
