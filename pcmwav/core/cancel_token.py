"""合并/拼接取消令牌"""
from pcmwav.core.audio.errors import CombineCancelledError


class CancelToken:
    """合并/拼接取消令牌

    merge 每写一帧、concat 每复制一块前轮询一次；被取消后抛出
    CombineCancelledError，已写出的部分由调用方处理。
    """

    def __init__(self):
        self._reason = None

    def cancel(self, reason: str = "operation cancelled"):
        self._reason = reason

    @property
    def is_cancelled(self) -> bool:
        return self._reason is not None

    def raise_if_cancelled(self):
        if self._reason is not None:
            raise CombineCancelledError(self._reason)

    def reset(self):
        self._reason = None
