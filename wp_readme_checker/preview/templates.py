"""
模板模块 - 加载 preview/templates 目录下的 Jinja2 模板

HTML 预览页面和 init 命令生成的 readme 骨架都由这里渲染。
"""

import re
from functools import lru_cache
from pathlib import Path
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader

from wp_readme_checker.markdown.renderer import escape_html

TEMPLATES_DIR = Path(__file__).with_name("templates")

# readme 骨架的默认值
TEMPLATE_DEFAULTS: dict = {
    "tags": ["tag1", "tag2"],
    "requires_at_least": "6.0",
    "tested_up_to": "6.6",
    "requires_php": "7.4",
    "stable_tag": "1.0.0",
}


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """
    创建模板环境

    模板内容自行转义（h 过滤器），渲染好的 Markdown HTML 原样插入。
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["h"] = escape_html
    env.filters["urlquote"] = lambda value: quote(str(value).strip(), safe="")
    return env


def render_template(name: str, **context) -> str:
    return get_environment().get_template(name).render(**context)


def readme_template(plugin_name: str = "WordPress Plugin Name") -> str:
    """
    生成一个可以直接通过验证的 readme.txt 骨架

    Args:
        plugin_name: 插件名称

    Returns:
        readme 文本（以换行结尾）
    """
    plugin_name = plugin_name.strip() or "WordPress Plugin Name"
    slug = re.sub(r"[^a-z0-9]+", "-", plugin_name.lower()).strip("-") or "plugin-name"
    text = render_template(
        "readme.txt.j2",
        plugin_name=plugin_name,
        slug=slug,
        **TEMPLATE_DEFAULTS,
    )
    return text.rstrip("\n") + "\n"
