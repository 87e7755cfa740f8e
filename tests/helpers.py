"""测试数据构造"""


def make_post(services, **overrides):
    data = {
        'title': 'Color Theory Guide',
        'content': 'Warm and cool colours ' * 50,
        'category': 'Tutorials',
        'tags': ['color', 'painting'],
    }
    data.update(overrides)
    return services.blog.create_post(data)


def make_artwork(services, **overrides):
    data = {
        'title': 'Neon Alley',
        'image_url': 'https://test-project.supabase.co/storage/v1/object/public/images/artwork/neon.png',
        'category': '2d',
        'subcategory': 'Illustration',
        'tags': ['cyberpunk'],
    }
    data.update(overrides)
    return services.artworks.create_artwork(data)
