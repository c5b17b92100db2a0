from callisp.builtin.env_builtin import register, BUILTINS

__all__ = ["register", "BUILTINS"]
