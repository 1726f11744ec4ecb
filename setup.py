from setuptools import setup, find_packages

setup(
    name='orbitlabels',
    version='0.1.0',
    description='Screen-space text labels for 3D objects seen through an orbiting perspective camera.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*', 'examples']),
    include_package_data=True,
    install_requires=[
        'numpy',
        'moderngl',
        'glfw',
        'pygame>=2.1.3',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'orbitlabels=orbitlabels.__main__:main',
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Multimedia :: Graphics :: 3D Rendering',
    ],
    python_requires='>=3.8',
)
