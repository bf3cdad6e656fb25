"""
Ограниченный параллелизм (fan-out) поверх ThreadPoolExecutor.

Набор задач известен заранее, результаты собираются по мере готовности
(as_completed) - порядок результатов не определён. Исключение, вышедшее
из задачи, прерывает стадию: восстановимые ошибки задачи обрабатывают сами.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List, Optional, TypeVar

from .config import default_max_workers

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def run_concurrently(func: Callable[[T], R], tasks: Iterable[T],
                     max_workers: Optional[int] = None,
                     label: str = "tasks") -> List[R]:
    """
    Выполняет func для каждой задачи в пуле потоков и ждёт завершения всех.

    Args:
        func: Функция одной задачи
        tasks: Конечный набор задач
        max_workers: Размер пула (по умолчанию 2 x CPU)
        label: Имя fan-out'а для логов

    Returns:
        Результаты в порядке завершения
    """
    task_list = list(tasks)
    if not task_list:
        return []

    workers = max(1, min(len(task_list), max_workers or default_max_workers()))
    logger.debug("Fan-out %s: %d задач, %d воркеров", label, len(task_list), workers)

    results: List[R] = []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(func, task) for task in task_list]
        try:
            for future in as_completed(futures):
                results.append(future.result())
        except BaseException:
            for future in futures:
                future.cancel()
            raise

    return results
