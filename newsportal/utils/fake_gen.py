from faker import Faker
from faker.providers import BaseProvider


class NewsProvider(BaseProvider):
    """
    新闻演示数据生成器
    同一条新闻的中英文标题由同一组词根拼出，保证两种语言内容对应
    """

    # (中文, English)
    subjects = [
        ('人工智能', 'Artificial Intelligence'), ('新能源汽车', 'Electric Vehicles'),
        ('半导体', 'Semiconductors'), ('全球贸易', 'Global Trade'),
        ('央行利率', 'Central Bank Rates'), ('气候政策', 'Climate Policy'),
        ('量子计算', 'Quantum Computing'), ('航天探索', 'Space Exploration'),
        ('数字货币', 'Digital Currency'), ('城市更新', 'Urban Renewal'),
    ]

    trends = [
        ('迎来新突破', 'Sees a New Breakthrough'), ('面临新挑战', 'Faces New Challenges'),
        ('加速发展', 'Accelerates'), ('进入新阶段', 'Enters a New Phase'),
        ('引发市场关注', 'Draws Market Attention'), ('重塑行业格局', 'Reshapes the Industry'),
    ]

    def news_headline(self):
        """返回 {'zh': ..., 'en': ...} 形式的一对标题"""
        subject = self.random_element(self.subjects)
        trend = self.random_element(self.trends)
        return {
            'zh': f'{subject[0]}{trend[0]}',
            'en': f'{subject[1]} {trend[1]}',
        }


fake = Faker('zh_CN')
fake.add_provider(NewsProvider)

fake_en = Faker('en_US')
