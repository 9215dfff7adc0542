"""
Core: доменные модели, fixed-point примитивы и контракты.

Базовые строительные блоки, не зависящие от коллабораторов пула
(ledger, custody, clock).
"""
