"""
Lispette: a small S-expression language with a tree-walking interpreter.
"""
