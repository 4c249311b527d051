
import time
import boto3
from dataclasses import dataclass
from typing import Optional, Dict
from topn_mrr.observability.logging import log_config_fallback

class ConfigurationError(ValueError):
    """評価開始前に検出される設定エラー（唯一の致命的エラー）"""

@dataclass
class MetricConfig:
    good_items: str = "user.testItems"
    suffix: Optional[str] = None
    parallel_enabled: bool = False
    list_length: int = 10

class ConfigManager:
    def __init__(self, ttl_seconds: float = 60.0):
        self.ttl_seconds = ttl_seconds
        self._cached_config: Optional[MetricConfig] = None
        self._last_fetched_at: float = 0.0
        self._ssm_client = boto3.client('ssm')

    def get_config(self) -> MetricConfig:
        current_time = time.time()

        if self._cached_config and (current_time - self._last_fetched_at < self.ttl_seconds):
            return self._cached_config

        try:
            params = self._fetch_from_ssm()
        except Exception as e:
            # SSMに到達できない場合はデフォルト（user.testItems）で評価する
            log_config_fallback(str(e))
            return self._get_default_config()

        # 取得できた値が不正な場合は握りつぶさずに失敗させる
        config = self._parse(params)
        self._cached_config = config
        self._last_fetched_at = current_time
        return config

    def _fetch_from_ssm(self) -> Dict[str, str]:
        names = [
            '/reco/eval/mrr/good_items',
            '/reco/eval/mrr/suffix',
            '/reco/eval/mrr/parallel_enabled',
            '/reco/eval/mrr/list_length'
        ]

        response = self._ssm_client.get_parameters(Names=names)
        return {p['Name']: p['Value'] for p in response.get('Parameters', [])}

    def _parse(self, params: Dict[str, str]) -> MetricConfig:
        from topn_mrr.selection.api import compile_selector

        good_items = params.get('/reco/eval/mrr/good_items', 'user.testItems')
        # 検証のみ。コンパイル結果は TopNMRRMetric.from_config で改めて生成する
        compile_selector(good_items)

        suffix = params.get('/reco/eval/mrr/suffix') or None

        # parallel_enabled assumes "true" (case-insensitive) is True
        parallel_str = params.get('/reco/eval/mrr/parallel_enabled', 'false').lower()
        parallel_enabled = parallel_str == 'true'

        length_str = params.get('/reco/eval/mrr/list_length', '10')
        try:
            list_length = int(length_str)
        except ValueError:
            raise ConfigurationError(f"list_length must be an integer, got {length_str!r}")
        if list_length <= 0:
            raise ConfigurationError(f"list_length must be positive, got {list_length}")

        return MetricConfig(
            good_items=good_items,
            suffix=suffix,
            parallel_enabled=parallel_enabled,
            list_length=list_length
        )

    def _get_default_config(self) -> MetricConfig:
        return MetricConfig()
