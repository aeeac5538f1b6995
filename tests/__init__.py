# Path: skewpf/tests/__init__.py
