"""
Основной пакет приложения shellect.

Лаунчер оболочек: читает список шеллов из ~/.shellect.toml,
показывает меню в терминале и заменяет текущий процесс выбранной оболочкой.
"""

__version__ = "0.1.0"
