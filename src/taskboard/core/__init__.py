"""Taskboard Core -- 领域模型、排序协调、视图投影与 SQLite 存储"""
