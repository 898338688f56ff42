"""
Вход в приложение (Launcher).

Этот скрипт запускает меню выбора оболочки из ~/.shellect.toml
и заменяет текущий процесс выбранной оболочкой.

Запуск:
    python launcher.py
"""

import sys
import os

# Добавляем текущую директорию (корень проекта) в начало sys.path.
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from shellect.__main__ import main

if __name__ == "__main__":
    main()
