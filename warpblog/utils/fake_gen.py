from faker import Faker
from faker.providers import BaseProvider

class BlogProvider(BaseProvider):
    """
    博客演示数据生成器
    生成分类名、文章标题和 Markdown 正文
    """

    category_names = [
        'Programming', 'Python', 'Databases', 'DevOps', 'Web',
        'Architecture', 'Testing', 'Security', 'Life', 'Reading'
    ]

    tag_pool = [
        'python', 'flask', 'sqlalchemy', 'redis', 'docker', 'linux',
        'http', 'rss', 'markdown', 'git', 'testing', 'cache'
    ]

    def blog_category(self):
        return self.random_element(self.category_names)

    def blog_title(self):
        return self.generator.sentence(nb_words=6).rstrip('.')

    def blog_tags(self):
        """逗号分隔的标签，故意带空格与重复项"""
        tags = self.random_elements(self.tag_pool, length=4, unique=False)
        return ', '.join(tags)

    def blog_markdown(self):
        """生成一段 Markdown 正文"""
        paragraphs = self.generator.paragraphs(nb=3)
        return '\n\n'.join([
            f'## {self.blog_title()}',
            paragraphs[0],
            f'* {self.generator.word()}\n* {self.generator.word()}',
            paragraphs[1],
            '```\nprint("hello")\n```',
            paragraphs[2],
        ])

# 初始化 Faker 并添加自定义 Provider
fake = Faker()
fake.add_provider(BlogProvider)
