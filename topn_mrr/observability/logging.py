
import json
import logging
import math
from typing import Optional

logger = logging.getLogger("evaluation")
logger.setLevel(logging.INFO)
# Handler設定は実行環境に依存するため、ここでは標準出力への出力のみを想定
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(message)s'))
logger.addHandler(handler)

def log_no_good_items(user_id: int):
    """
    good itemが存在しないユーザーを警告として出力する。
    TopNMRRMetric のデフォルト診断シンク。
    """
    logger.warning(json.dumps({
        "event": "no_good_items",
        "user_id": user_id,
    }))

def log_config_fallback(error: str):
    """
    SSMから設定を取得できず、デフォルト設定で評価する場合に警告を出力する。
    """
    logger.warning(json.dumps({
        "event": "config_fallback",
        "error": error,
    }))

def log_aggregate_result(run_id: str, user_count: int, mrr: float, mrr_of_good: float):
    """
    評価全体の集計結果を構造化ログ(JSON)として出力する。
    NaN は JSON に存在しないため null として出力する。
    """
    log_data = {
        "event": "mrr_aggregate",
        "run_id": run_id,
        "user_count": user_count,
        "mrr": _json_float(mrr),
        "mrr_of_good": _json_float(mrr_of_good),
    }

    logger.info(json.dumps(log_data))

def _json_float(value: float) -> Optional[float]:
    return None if math.isnan(value) else value
