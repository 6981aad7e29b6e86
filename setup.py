from setuptools import setup, find_packages

setup(
    name='flightgeom',
    version='1.0.0',
    description='Vector and quaternion geometry for converting spacecraft orientations to flight attitude angles',
    packages=find_packages(include=['flightgeom', 'flightgeom.*']),
    python_requires='>=3.10',
    install_requires=['numpy'],
    extras_require={'test': ['pytest', 'scipy']},
)
