"""
String operation tests.

Tests for lenstr.ops:
- Mutation engine (trim, pad, case, replace, ...)
- Query engine (compare, search, character classes)
- Segmentation engine (split, join, partition, split_lines)

Maps to: lenstr/ops/
"""
