from setuptools import setup, find_packages
import sys, os

here = os.path.abspath(os.path.dirname(__file__))
README = open(os.path.join(here, 'README.md')).read()
NEWS = open(os.path.join(here, 'NEWS.txt')).read()


version = '0.0.1'

install_requires = [
    'nmigen',  # Const.normalize for word-width checks and wrapping
]

test_requires = [
    'pytest',
    'hypothesis',
]

setup(
    name='libresoc-divround',
    version=version,
    description="Integer division/remainder with selectable rounding, "
                "built on bit-serial long division",
    long_description=README + '\n\n' + NEWS,
    long_description_content_type='text/markdown',
    classifiers=[
        "Topic :: Software Development :: Libraries",
        "License :: OSI Approved :: GNU Lesser General Public License v2 or later (LGPLv2+)",
        "Programming Language :: Python :: 3",
    ],
    keywords='division rounding divmod',
    author='Luke Kenneth Casson Leighton',
    author_email='lkcl@libre-soc.org',
    url='http://git.libre-soc.org/?p=divround.git',
    license='LGPLv2.1+',
    packages=find_packages('src'),
    package_dir = {'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.11',
    install_requires=install_requires,
    extras_require={'test': test_requires},
)
