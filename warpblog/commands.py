import click
import random
from flask.cli import with_appcontext
from warpblog.extensions import db
from warpblog.models.auth import User, Role
from warpblog.models.content import Category, Article, Text, Attachment
from warpblog.models.sys import Setting
from warpblog.utils.fake_gen import fake, BlogProvider
from warpblog.utils.helpers import format_tags, now_millis

ROLE_CHOICES = [r.name.lower() for r in Role]


@click.command('status')
@with_appcontext
def status():
    """
    [验证指令] 查看当前数据库中的数据统计。
    """
    click.echo(click.style('📊 WarpBlog 数据库状态:', fg='cyan', bold=True))

    try:
        u_count = User.query.count()
        c_count = Category.query.count()
        a_count = Article.query.count()
        published = Article.query.filter(Article.publish_at < now_millis()).count()
        t_count = Text.query.count()
        f_count = Attachment.query.count()

        click.echo(f" - 用户 (Users): \t{u_count}")
        click.echo(f" - 分类 (Categories): \t{c_count}")
        click.echo(f" - 文章 (Articles): \t{a_count} (已发布 {published})")
        click.echo(f" - 正文 (Texts): \t{t_count}")
        click.echo(f" - 附件 (Attachments): \t{f_count}")

        if u_count > 0:
            click.echo(click.style('✔ 数据库连接正常，数据已存在。', fg='green'))
        else:
            click.echo(click.style('⚠ 数据库为空，请运行 flask forge 生成数据。', fg='yellow'))

    except Exception as e:
        click.echo(click.style(f'✘ 数据库读取失败: {str(e)}', fg='red'))
        click.echo("请检查是否执行了 'flask db upgrade'")


@click.command('forge')
@click.option('--count', default=30, help='生成的文章数量 (默认30)')
@with_appcontext
def forge(count):
    """
    [演示数据] 重建数据表并填充用户、分类和文章。
    警告：这将清除数据库中的现有数据！
    """
    click.echo(click.style(f'⚡ 初始化演示数据 (文章: {count})...', fg='cyan', bold=True))

    # 1. 清除旧数据
    db.drop_all()
    db.create_all()

    # 2. 用户
    click.echo('正在创建用户...')
    users = init_users()

    # 3. 分类
    click.echo('正在创建分类...')
    categories = init_categories()

    # 4. 文章
    click.echo('正在发布文章...')
    init_articles(users, categories, count)

    db.session.add_all([
        Setting(group='website', key='name', value='WarpBlog'),
        Setting(group='website', key='description', value=fake.sentence(nb_words=8)),
    ])
    db.session.commit()

    click.echo(click.style('✔ 演示数据构建完成！', fg='green', bold=True))
    click.echo("管理员账号: admin@warpblog.io / 密码: admin")


@click.command('create-user')
@click.argument('email')
@click.argument('name')
@click.argument('password')
@click.option('--role', type=click.Choice(ROLE_CHOICES), default='subscriber', help='用户角色')
@with_appcontext
def create_user(email, name, password, role):
    """创建用户"""
    email = email.strip().lower()
    if User.query.filter_by(email=email).first():
        click.echo(click.style(f'✘ 用户已存在: {email}', fg='red'))
        return
    user = User(email=email, name=name, password=password, role=Role[role.upper()])
    user.save()
    click.echo(click.style(f'✔ 已创建用户 {email} ({role})', fg='green'))


def init_users():
    """每种角色各一个用户"""
    users = []
    for role in Role:
        email = 'admin@warpblog.io' if role == Role.ADMIN else f'{role.name.lower()}@warpblog.io'
        user = User(
            email=email,
            name=fake.name(),
            password='admin' if role == Role.ADMIN else 'password',
            role=role
        )
        db.session.add(user)
        users.append(user)
    db.session.commit()
    return users


def init_categories():
    categories = []
    names = fake.random_elements(BlogProvider.category_names, length=5, unique=True)
    for order, name in enumerate(names):
        category = Category(name=name, description=fake.sentence(), display_order=order)
        db.session.add(category)
        categories.append(category)
    db.session.commit()
    return categories


def init_articles(users, categories, count):
    """生成文章，约 1/5 为未来发布"""
    authors = [u for u in users if u.role <= Role.EDITOR]
    now = now_millis()
    day = 24 * 3600 * 1000
    for i in range(count):
        author = random.choice(authors)
        offset = random.randint(1, 30) * day
        article = Article(
            user_id=author.id,
            user_name=author.name,
            category_id=random.choice(categories).id,
            name=fake.blog_title(),
            description=fake.sentence(nb_words=12),
            tags=format_tags(fake.blog_tags()),
            publish_at=now + offset if i % 5 == 0 else now - offset
        )
        db.session.add(article)
        db.session.flush()
        text = Text(ref_id=article.id, value=fake.blog_markdown())
        db.session.add(text)
        db.session.flush()
        article.content_id = text.id
    db.session.commit()
    click.echo(f'  ✓ 已创建 {count} 篇文章')
