import random
from faker import Faker
from faker.providers import BaseProvider


class NewsroomProvider(BaseProvider):
    """
    Demo newsroom data: section names and plausible headlines
    """

    sections = [
        ('Politics', '#ef4444'), ('Business', '#10b981'), ('Technology', '#8b5cf6'),
        ('Sports', '#f59e0b'), ('Culture', '#ec4899'), ('World', '#3b82f6'),
    ]

    subjects = [
        'Parliament', 'Central Bank', 'City Council', 'National Team', 'Mining Sector',
        'Health Ministry', 'Startup Scene', 'Energy Regulator', 'University', 'Airline',
    ]

    verbs = [
        'Approves', 'Rejects', 'Announces', 'Delays', 'Expands', 'Reviews', 'Launches', 'Cuts',
    ]

    objects = [
        'New Budget', 'Rate Decision', 'Transport Plan', 'Export Deal', 'Reform Package',
        'Research Fund', 'Winter Schedule', 'Digital Strategy', 'Housing Program',
    ]

    def news_sections(self):
        return list(self.sections)

    def headline(self):
        """e.g. 'City Council Delays Transport Plan After Public Hearing'"""
        base = f"{self.random_element(self.subjects)} {self.random_element(self.verbs)} " \
               f"{self.random_element(self.objects)}"
        if random.random() < 0.5:
            return f"{base} {self.generator.sentence(nb_words=3).rstrip('.').title()}"
        return base


fake = Faker('en_US')
fake.add_provider(NewsroomProvider)
