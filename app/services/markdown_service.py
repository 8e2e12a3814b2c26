import markdown

class MarkdownService:
    def __init__(self):
        self.extensions = [
            'extra',
            'admonition',
            'codehilite',
            'nl2br',
            'sane_lists',
            'toc'
        ]

    def convert_to_html(self, markdown_text: str) -> str:
        """Конвертирует Markdown урока в HTML"""
        if not markdown_text:
            return ""
        # Отдельный экземпляр на вызов: Markdown хранит состояние между convert()
        md = markdown.Markdown(extensions=self.extensions)
        return md.convert(markdown_text)
