"""
Markdown 渲染工具
"""
import markdown
from markdown.extensions import Extension

_EXTENSIONS = ['fenced_code', 'tables', 'sane_lists']


class EscapeHtmlExtension(Extension):
    """禁止原始 HTML：块级和行内的 HTML 都按普通文本转义输出"""

    def extendMarkdown(self, md):
        md.preprocessors.deregister('html_block')
        md.inlinePatterns.deregister('html')


def markdown_to_html(text, safe=False):
    """
    将文章 Markdown 转换为 HTML
    :param safe: 为 True 时转义正文中的原始 HTML (用于向读者展示)
    """
    if not text:
        return ''
    extensions = list(_EXTENSIONS)
    if safe:
        extensions.append(EscapeHtmlExtension())
    return markdown.markdown(text, extensions=extensions, output_format='html')
