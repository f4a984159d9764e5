import os
import setuptools
import sys

if sys.version_info[0] < 3:
    sys.exit("belongsto requires Python 3.")

here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

setuptools.setup(
    author='Tommy MacWilliam',
    author_email='tmacwilliam@cs.harvard.edu',
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Database',
    ],
    description='Belongs-to relation accessors for a small async record modeler.',
    install_requires=[
        'msgpack',
        'psycopg2',
    ],
    license='MIT',
    long_description=long_description,
    keywords='orm relation belongs-to postgres postgresql',
    name='belongsto',
    packages=setuptools.find_packages(include=['belongsto', 'belongsto.*']),
    python_requires='>=3.9',
    url='https://github.com/tmacwill/belongsto',
    version='0.1.0',
)
