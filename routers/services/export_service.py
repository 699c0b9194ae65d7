"""
导出服务类
将翻译数据按 locale -> key -> value 分组导出，面向10万级数据量

性能要点：
1. 只投影 locale/key/value 三列，不加载时间戳与标签关联
2. 不构造ORM实体和Row，直接使用游标返回的原始元组
3. 单次查询 + 单次线性遍历完成分组，不按语言或键重复查询
"""
# 标准库导包
import logging
from itertools import groupby
from operator import itemgetter
from typing import Dict, Iterable, Sequence

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.repositories.translation_repository import TranslationRepository

# 配置日志
logger = logging.getLogger(__name__)

_locale_of = itemgetter(0)
_key_value = itemgetter(1, 2)


def group_by_locale(rows: Iterable[Sequence]) -> Dict[str, Dict[str, str]]:
    """
    将 (locale, key, value) 行分组为 {locale: {key: value}}

    同一 (locale, key) 出现多次时保留最后一次的值；行按 locale 排序时每个语言只建一次字典

    Args:
        rows: 按 locale、key 排序的结果行

    Returns:
        两级映射
    """
    grouped: Dict[str, Dict[str, str]] = {}
    for locale, locale_rows in groupby(rows, key=_locale_of):
        bucket = grouped.get(locale)
        if bucket is None:
            grouped[locale] = dict(map(_key_value, locale_rows))
        else:
            bucket.update(map(_key_value, locale_rows))
    return grouped


class ExportService:
    """导出服务类"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.translation_repo = TranslationRepository(session)

    async def export(self) -> Dict[str, Dict[str, str]]:
        """
        导出全部翻译

        Returns:
            {locale: {key: value}}，无数据时为空字典
        """
        rows = await self.translation_repo.get_all_for_export()
        grouped = group_by_locale(rows)

        logger.info(f"导出全部翻译: records={len(rows)}, locales={len(grouped)}")
        return grouped

    async def export_by_locale(self, locale: str) -> Dict[str, str]:
        """
        导出单个语言的翻译（扁平映射）

        Args:
            locale: 语言代码

        Returns:
            {key: value}，该语言无数据时为空字典
        """
        rows = await self.translation_repo.get_all_for_export(locale=locale)
        flat = dict(map(_key_value, rows))

        logger.info(f"导出语言翻译: locale={locale}, records={len(rows)}")
        return flat
