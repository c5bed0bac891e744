# wmsconsole/core/logging.py
import json as _json
import logging
import sys

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class JsonFormatter(logging.Formatter):
    """每条日志一行 JSON：ts / level / logger / msg，有异常时附 exc_info。"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return _json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json: bool = False) -> None:
    """
    控制台日志入口（main 启动时调用一次）：
    - 根 logger 只挂一个 stdout handler，重复调用不叠加
    - json=True 时每行输出一个 JSON 对象，便于采集；否则纯文本
    - httpx 每个请求都会打 INFO，与网关自己的 "API Request" 重复，非 DEBUG 时压到 WARNING
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if json else logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)

    noisy = logging.INFO if level.upper() == "DEBUG" else logging.WARNING
    logging.getLogger("httpx").setLevel(noisy)
    logging.getLogger("httpcore").setLevel(noisy)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
