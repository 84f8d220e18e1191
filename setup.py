from setuptools import setup, find_packages

with open("README.md", "r", encoding='utf-8') as fh:
    long_description = fh.read()

setup(
    name="python-ldap-codec",
    version="1.0.0",
    packages=find_packages(),
    include_package_data=True,
    package_data={'ldap_codec': ["py.typed"]},
    python_requires='>=3.10',
    install_requires=[
        'python-ldap',
        'case-insensitive-dictionary',
    ],
    author="Caltech IMSS ADS",
    author_email="cmalek@caltech.edu",
    description="Build and parse LDAP DNs, and convert entries and modlists for python-ldap.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords=['ldap', 'dn'],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: System :: Systems Administration :: Authentication/Directory :: LDAP',
    ],
)
