"""
Tag vocabulary - the fixed set of technology and role tags that job
descriptions and resumes are ranked against, plus alias normalization.
"""
from typing import Dict, List

_RAW_TAGS = [
    # Programming languages
    'JavaScript', 'TypeScript', 'Python', 'Java', 'C++', 'C#', 'Go', 'Golang', 'Rust', 'Ruby', 'PHP',
    'Swift', 'Kotlin', 'Scala', 'R', 'MATLAB', 'Perl', 'Lua', 'Dart', 'Elixir', 'Erlang', 'Haskell',
    'Clojure', 'F#', 'Objective-C', 'Assembly', 'Shell Scripting', 'Bash', 'PowerShell',

    # Frontend
    'React', 'Vue.js', 'Vue', 'Angular', 'AngularJS', 'Next.js', 'Nuxt.js', 'Svelte', 'Ember.js',
    'HTML', 'HTML5', 'CSS', 'CSS3', 'SASS', 'SCSS', 'Less', 'Tailwind CSS', 'Bootstrap', 'Material-UI',
    'Webpack', 'Vite', 'Parcel', 'Rollup', 'Babel', 'ESLint', 'Prettier', 'Jest', 'Cypress',
    'Redux', 'MobX', 'Zustand', 'Apollo Client', 'React Query',

    # Backend
    'Node.js', 'Node', 'Express', 'Express.js', 'NestJS', 'Fastify', 'Koa', 'Hapi', 'Sails.js',
    'Django', 'Flask', 'FastAPI', 'Tornado', 'Bottle', 'CherryPy', 'Pyramid',
    'Spring Boot', 'Spring', 'Spring MVC', 'Spring Cloud', 'Hibernate', 'JPA',
    'ASP.NET', '.NET', 'ASP.NET Core', 'Entity Framework', 'WCF', 'WPF',
    'Ruby on Rails', 'Rails', 'Sinatra', 'Grape',
    'Laravel', 'Symfony', 'CodeIgniter', 'Zend Framework',
    'Phoenix', 'Plug', 'Cowboy',

    # Databases
    'MongoDB', 'PostgreSQL', 'Postgres', 'MySQL', 'MariaDB', 'SQLite', 'Oracle', 'SQL Server',
    'Redis', 'Memcached', 'DynamoDB', 'Elasticsearch', 'Cassandra', 'CouchDB', 'Neo4j',
    'InfluxDB', 'TimescaleDB', 'CockroachDB', 'Firebase', 'Firestore', 'Supabase',
    'Prisma', 'Sequelize', 'TypeORM', 'Mongoose', 'SQLAlchemy',

    # Cloud & DevOps
    'AWS', 'Amazon Web Services', 'EC2', 'S3', 'Lambda', 'API Gateway', 'CloudFormation',
    'Azure', 'Microsoft Azure', 'Azure Functions', 'Azure DevOps',
    'GCP', 'Google Cloud Platform', 'Cloud Functions', 'App Engine', 'Cloud Run',
    'Docker', 'Kubernetes', 'K8s', 'Helm', 'Terraform', 'Ansible', 'Puppet', 'Chef',
    'CI/CD', 'Jenkins', 'GitLab CI', 'GitHub Actions', 'CircleCI', 'Travis CI', 'Bamboo',
    'Prometheus', 'Grafana', 'ELK Stack', 'Splunk', 'Datadog', 'New Relic',

    # Mobile
    'React Native', 'Flutter', 'Ionic', 'Xamarin', 'Cordova', 'PhoneGap',
    'iOS', 'Android', 'Xcode', 'Android Studio',

    # Data & ML
    'Machine Learning', 'ML', 'Deep Learning', 'AI', 'Artificial Intelligence',
    'TensorFlow', 'PyTorch', 'Keras', 'Scikit-learn', 'Pandas', 'NumPy', 'Matplotlib',
    'Data Science', 'Big Data', 'Apache Spark', 'Hadoop', 'Hive', 'Pig', 'Kafka',
    'Jupyter', 'Notebook', 'R Studio', 'Tableau', 'Power BI',

    # Testing
    'Mocha', 'Chai', 'Jasmine', 'Selenium', 'Playwright', 'Puppeteer',
    'Unit Testing', 'Integration Testing', 'E2E Testing', 'TDD', 'BDD',

    # APIs & protocols
    'REST API', 'REST', 'GraphQL', 'gRPC', 'WebSocket', 'SOAP', 'RPC',
    'OAuth', 'JWT', 'OpenID Connect',

    # Architecture
    'Microservices', 'Serverless', 'Event-Driven', 'Domain-Driven Design', 'DDD',
    'MVC', 'MVP', 'MVVM', 'Clean Architecture', 'Hexagonal Architecture',

    # Practices
    'Agile', 'Scrum', 'Kanban', 'DevOps', 'SRE', 'Site Reliability Engineering',
    'Continuous Integration', 'Continuous Deployment',

    # Roles
    'Software Engineer', 'Full Stack Developer', 'Full Stack', 'Backend Developer', 'Backend',
    'Frontend Developer', 'Frontend', 'DevOps Engineer', 'SRE Engineer',
    'Data Engineer', 'Data Scientist', 'ML Engineer', 'AI Engineer',
    'Mobile Developer', 'iOS Developer', 'Android Developer',
    'QA Engineer', 'Test Engineer', 'QA Automation', 'Security Engineer',
    'Cloud Engineer', 'Solutions Architect', 'Tech Lead', 'Engineering Manager',

    # Other
    'Git', 'GitHub', 'GitLab', 'Bitbucket', 'SVN', 'Mercurial',
    'Linux', 'Unix', 'Windows Server', 'macOS',
    'Nginx', 'Apache', 'HAProxy', 'Load Balancing',
    'RabbitMQ', 'Apache Kafka', 'ActiveMQ', 'SQS', 'SNS',
    'Blockchain', 'Ethereum', 'Solidity', 'Web3', 'Smart Contracts',
    'Game Development', 'Unity', 'Unreal Engine', 'Cocos2d',
]

# Order-preserving dedupe
COMMON_TAGS: List[str] = list(dict.fromkeys(_RAW_TAGS))

TAG_ALIASES: Dict[str, str] = {
    'golang': 'Go',
    'node': 'Node.js',
    'nodejs': 'Node.js',
    'postgres': 'PostgreSQL',
    'postgresql': 'PostgreSQL',
    'vue': 'Vue.js',
    'vuejs': 'Vue.js',
    'angularjs': 'Angular',
    'reactjs': 'React',
    'nextjs': 'Next.js',
    'nuxtjs': 'Nuxt.js',
    'expressjs': 'Express',
    'express.js': 'Express',
    'rails': 'Ruby on Rails',
    'ror': 'Ruby on Rails',
    'aspnet': 'ASP.NET',
    'dotnet': '.NET',
    'k8s': 'Kubernetes',
    'ml': 'Machine Learning',
    'ai': 'Artificial Intelligence',
    'aws': 'AWS',
    'gcp': 'GCP',
    'azure': 'Azure',
}


def normalize_tag_name(tag: str) -> str:
    """Map common aliases to their canonical name; ``golang`` -> ``Go``."""
    stripped = tag.strip()
    return TAG_ALIASES.get(stripped.lower(), stripped)


def dedupe_tags(tags) -> List[str]:
    """Drop blanks and case-insensitive duplicates, keeping first spelling."""
    seen = set()
    unique = []
    for tag in tags:
        if not tag or not str(tag).strip():
            continue
        key = str(tag).strip().lower()
        if key not in seen:
            seen.add(key)
            unique.append(str(tag).strip())
    return unique
