"""stmgen - embassy STM32 project generator."""

__version__ = "0.1.0"
