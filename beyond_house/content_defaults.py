"""Hard-coded fallbacks rendered whenever the database has no row for a value.

The shapes here mirror the page_content / services / portfolio / testimonials
tables so templates can consume either source without branching.
"""

DEFAULT_SITE_SETTINGS = {
    'company_name': 'Beyond House Interior Construction & Consultancy',
    'location': 'Nairobi, Kenya',
    'phone': '0791 996 448',
    'email': 'Beyondhouseint@gmail.com',
    'whatsapp': '+254791996448',
    'seo_title': 'Beyond House | Interior Construction & Consultancy in Nairobi',
    'seo_description': (
        'Premium interior construction in Nairobi: ceiling design, custom cabinetry, '
        'walls & décor, floors & tiles. Book a free consultation today.'
    ),
    'logo_url': '',
    'social_image_url': '',
}

HOME_DEFAULTS = {
    'hero': {
        'heading': 'Beyond House Interior Construction',
        'tagline': 'Transforming Your Space Beyond Imagination',
        'cta_label': 'View Services',
        'cta_link': '/services',
    },
    'director': {
        'name': 'Dancan Odhiambo',
        'role': 'Founder & Director',
        'description1': (
            'With years of experience in interior construction and design, Dancan founded Beyond House '
            'with a vision to deliver exceptional quality and innovative designs.'
        ),
        'description2': (
            'His hands-on approach and attention to detail ensure every project meets the highest standards.'
        ),
    },
    'features': [
        {'title': 'Quality Craftsmanship', 'description': 'Premium materials and expert workmanship in every project.'},
        {'title': 'Professional Expertise', 'description': 'Experienced team of designers and skilled craftsmen.'},
        {'title': 'Creative Solutions', 'description': 'Innovative designs tailored to your unique vision.'},
        {'title': 'Timely Delivery', 'description': 'Projects completed on schedule without compromising quality.'},
    ],
    'cta': {
        'heading': 'Ready to Transform Your Space?',
        'text': "Let's discuss your project and bring your vision to life.",
    },
}

ABOUT_DEFAULTS = {
    'hero': {
        'heading': 'Crafting Beautiful Spaces Since Day One',
        'description': (
            'Beyond House Interior Construction & Consultancy is a premier interior construction company '
            'based in Nairobi, Kenya.'
        ),
    },
    'story': {
        'heading': 'Building Dreams, One Space at a Time',
        'paragraph1': 'We specialize in transforming spaces with high-quality craftsmanship and innovative designs.',
        'paragraph2': 'Over 100 successful projects across Kenya have shaped how we plan, build and finish.',
        'paragraph3': 'Every project starts with listening, and ends with a space our clients are proud of.',
    },
    'mission': {
        'text': 'To deliver exceptional interior construction that elevates how people live and work.',
    },
    'vision': {
        'text': "To be East Africa's most trusted name in interior construction and design.",
    },
    'values': [
        {'title': 'Excellence', 'description': 'We strive for excellence in every project, ensuring the highest quality standards.'},
        {'title': 'Integrity', 'description': 'Honesty and transparency guide all our client relationships and business practices.'},
        {'title': 'Innovation', 'description': 'We embrace creative solutions and stay ahead of design trends.'},
    ],
}

DEFAULT_SERVICES = [
    {
        'slug': 'ceiling',
        'title': 'Ceiling Design',
        'description': (
            'Transform your rooms with stunning ceiling designs that add depth, character, and modern elegance.'
        ),
        'benefits': [
            'Custom gypsum ceiling designs',
            'LED strip and cove lighting integration',
            'Geometric and architectural patterns',
            'Coffered and tray ceiling designs',
            'Sound-absorbing acoustic ceilings',
            'Professional installation and finishing',
        ],
        'image_url': '/static/img/portfolio/ceiling-1.jpg',
    },
    {
        'slug': 'cabinetry',
        'title': 'Custom Cabinetry',
        'description': (
            'From kitchen cabinets to wardrobes, we design and build custom storage solutions that maximize space.'
        ),
        'benefits': [
            'Custom kitchen cabinets',
            'Built-in wardrobes and closets',
            'Bathroom vanities and storage',
            'Entertainment centers and shelving',
            'Office and study furniture',
            'Premium hardware and finishes',
        ],
        'image_url': '/static/img/portfolio/cabinetry-1.jpg',
    },
    {
        'slug': 'walls',
        'title': 'Walls & Décor',
        'description': (
            'Create stunning accent walls and decorative finishes that reflect your personality.'
        ),
        'benefits': [
            'Wood slat and panel walls',
            'PVC and WPC wall panels',
            'Textured paint finishes',
            'Decorative molding and trim',
            'Accent wall designs',
            'Mirror and glass installations',
        ],
        'image_url': '/static/img/portfolio/walls-1.jpg',
    },
    {
        'slug': 'floors',
        'title': 'Floors & Tiles',
        'description': (
            'The right flooring sets the foundation for your entire interior design.'
        ),
        'benefits': [
            'Ceramic and porcelain tiles',
            'Marble and granite flooring',
            'Engineered and solid hardwood',
            'Vinyl and laminate options',
            'Bathroom and kitchen tiling',
            'Professional grouting and finishing',
        ],
        'image_url': '/static/img/portfolio/tiles-1.jpg',
    },
]

DEFAULT_TESTIMONIALS = [
    {
        'client_name': 'Sarah Wanjiku',
        'client_role': 'Homeowner, Karen',
        'content': (
            'Beyond House transformed our living room beyond our expectations. The ceiling design and custom '
            'cabinets are absolutely stunning.'
        ),
        'rating': 5,
    },
    {
        'client_name': 'James Omondi',
        'client_role': 'Property Developer',
        'content': (
            "Professional, reliable, and creative. They've completed multiple projects for us and the quality "
            'is consistently excellent.'
        ),
        'rating': 5,
    },
    {
        'client_name': 'Grace Muthoni',
        'client_role': 'Homeowner, Kileleshwa',
        'content': (
            'The team was incredibly patient with our design requests. The kitchen remodel exceeded our expectations.'
        ),
        'rating': 5,
    },
]

DEFAULT_PORTFOLIO = [
    {'image_url': '/static/img/portfolio/kitchen-1.jpg', 'title': 'Modern kitchen design', 'category': 'Kitchens', 'hover_caption': 'Modern kitchen design'},
    {'image_url': '/static/img/portfolio/bedroom-1.jpg', 'title': 'Elegant bedroom interior', 'category': 'Bedrooms', 'hover_caption': 'Elegant bedroom interior'},
    {'image_url': '/static/img/portfolio/wardrobe-1.jpg', 'title': 'Custom wardrobe', 'category': 'Cabinetry', 'hover_caption': 'Custom wardrobe'},
    {'image_url': '/static/img/portfolio/ceiling-1.jpg', 'title': 'Gypsum ceiling with LED', 'category': 'Ceilings', 'hover_caption': 'Gypsum ceiling with LED'},
]

CONSULTANCY_STEPS = [
    {
        'number': '01',
        'title': 'Consultation',
        'description': 'We start with an in-depth discussion about your vision, requirements, and budget to understand your needs.',
    },
    {
        'number': '02',
        'title': 'Design & Planning',
        'description': 'Our team creates detailed designs and plans, presenting options that align with your style and space.',
    },
    {
        'number': '03',
        'title': 'Execution',
        'description': 'Our skilled craftsmen bring the designs to life with precision and quality craftsmanship.',
    },
    {
        'number': '04',
        'title': 'Final Delivery',
        'description': 'We complete the project with finishing touches and ensure your complete satisfaction.',
    },
]

SERVICE_TYPE_CHOICES = (
    ('ceiling', 'Ceiling Design'),
    ('cabinetry', 'Cabinetry'),
    ('walls', 'Walls & Décor'),
    ('floors', 'Floors & Tiles'),
    ('full', 'Full Interior Design'),
)
