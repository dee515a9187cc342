import setuptools

with open('README.md', 'rt') as f:
    long_description = f.read()

setuptools.setup(
    name='rangefp',
    version='0.0.0',
    description='exact range checks between integer and floating-point formats',
    long_description=long_description,
    license='MIT',
    install_requires=['numpy>=1.23.0', 'gmpy2>=2.1.2'],
    extras_require={
        'test': ['pytest>=7.0', 'hypothesis>=6.0'],
    },
    packages=['rangefp', 'rangefp.core', 'rangefp.arithmetic'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Operating System :: POSIX :: Linux',
        'License :: OSI Approved :: MIT License',
    ],
)
