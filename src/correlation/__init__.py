"""Correlation rule authoring.

Modules
───────
editor   – RuleDraft and the operations that edit it
store    – RuleCollection: save, enable/disable, delete
session  – Manage/Edit state machine around one draft
"""
