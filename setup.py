from setuptools import setup, find_packages

setup(
    name='precisionfield',
    version='0.1.0',
    description='A Python library for compiling 2D signed distance field trees to GLSL and canonical hashes.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=('tests', 'tests.*', 'examples', 'examples.*')),
    include_package_data=True,
    package_data={
        'precisionfield': ['glsl/*.glsl'],
    },
    install_requires=[
        'numpy',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Scientific/Engineering :: Visualization',
    ],
    python_requires='>=3.8',
)
