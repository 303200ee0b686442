"""
查询参数解析
"""


def int_param(request, name, default):
    """读取正整数查询参数，缺失或非法时返回 default"""
    try:
        value = int(request.query_params.get(name, default))
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def id_param(request, name):
    """
    读取 ID 类查询参数。

    :return: (value, ok)；未提供时为 (None, True)，非数字时为 (None, False)
    """
    raw = request.query_params.get(name)
    if not raw:
        return None, True
    if not raw.isdigit():
        return None, False
    return int(raw), True
