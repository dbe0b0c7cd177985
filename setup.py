#!/usr/bin/env python

from setuptools import setup, find_packages
import mimehdr

setup(name='mimehdr',
      version=mimehdr.__version__,
      description='Typed MIME header fields, with lint.',
      long_description=open("README.md").read(),
      long_description_content_type="text/markdown",
      license = "MIT",
      packages=find_packages(include=['mimehdr', 'mimehdr.*']),
      package_dir={'mimehdr': 'mimehdr'},
      entry_points={
        'console_scripts': ['mimehdr = mimehdr.cli:main_exit']
      },
      python_requires=">=3.7",
      install_requires=[
          'markdown >= 2.6.5',
          'markupsafe >= 2.0',
          'typing_extensions >= 3.7',
      ],
      extras_require={
          'dev': [
          'mypy',
          'pytest',
          ]
      },
      classifiers=[
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Communications :: Email',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: MIT License',
      ],
)
