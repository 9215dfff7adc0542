"""
Тестовый набор share pool с линейным vesting

Содержит:
- tests/unit/      : Unit тесты модулей и сценариев пула
- tests/property/  : Property-based тесты (Hypothesis) инвариантов пула
"""
