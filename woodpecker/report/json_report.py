# woodpecker/report/json_report.py
"""
Выгрузка записей ресурса (HoleSet / ReplySet) в файл.

Формат выбирается по расширению: ``.jsonl`` / ``.ndjson`` — по одной
записи на строку, всё остальное — один JSON-массив.
"""
import json
from pathlib import Path
from typing import Any, Dict, List

_LINE_SUFFIXES = (".jsonl", ".ndjson")


def render_json(records: List[Dict[str, Any]], output_path: Path | str, pretty: bool = False) -> Path:
    """
    Сохраняет записи по указанному пути и возвращает Path файла.

    :param records: ``resource.to_records()``
    :param output_path: путь к файлу; родительские папки создаются
    :param pretty: отступ 2 (для JSON Lines игнорируется)

    Пример:
    ```python
    render_json(holes.to_records(), 'dumps/feed.jsonl')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        if output.suffix.lower() in _LINE_SUFFIXES:
            for record in records:
                f.write(json.dumps(record, ensure_ascii=False))
                f.write('\n')
        else:
            json.dump(records, f, ensure_ascii=False, indent=2 if pretty else None)

    return output
