"""Configuration Tests (car specification, scenarios, YAML loading)"""
