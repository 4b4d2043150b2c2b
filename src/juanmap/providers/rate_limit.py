import threading
import time


class TokenBucket:
    """
    Token Bucket 速率限制器

    保護外部服務配額（Nominatim 使用政策、Google Directions 配額），
    允許適度突發請求但維持長期穩定速率。多執行緒共用時以鎖保護。

    Args:
        rate (float): 每秒補充的 token 數量
        burst (int): token 桶容量，即最大突發請求數
    """

    def __init__(self, rate: float, burst: int):
        self.rate = rate
        self.burst = burst
        self.tokens = burst
        self.lock = threading.Lock()
        self.timestamp = time.monotonic()

    def consume(self, tokens: int = 1) -> bool:
        """
        嘗試消耗 token，足夠則扣除並回傳 True，否則不扣除並回傳 False。
        """
        with self.lock:
            now = time.monotonic()
            elapsed = now - self.timestamp
            # 補充 token，不超過 burst 上限
            self.tokens = min(self.burst, self.tokens + elapsed * self.rate)
            self.timestamp = now
            if self.tokens >= tokens:
                self.tokens -= tokens
                return True
            return False
