"""Taskboard Gateway -- FastAPI HTTP 接口"""
