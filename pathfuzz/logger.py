"""日志封装：日志经 tqdm.write 输出，不会打断进度条"""
import logging
import sys

from tqdm import tqdm

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


class TqdmLoggingHandler(logging.Handler):
    """把日志写到 stderr，输出前暂停进度条，输出后重绘"""

    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=sys.stderr)
        except Exception:
            self.handleError(record)


def get_logger(name='pathfuzz', level=logging.INFO):
    """配置包日志；重复调用只调整级别，不会重复添加处理器"""
    logger = logging.getLogger(name)
    if not any(isinstance(h, TqdmLoggingHandler) for h in logger.handlers):
        handler = TqdmLoggingHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
